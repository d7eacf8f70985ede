from crudapps.fruit_app import services


def _fruit_by_name(name):
    return next(f for f in services.list_fruits() if f["name"] == name)


def test_root_redirects_to_index(fruit_client):
    r = fruit_client.get("/", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/fruits"


def test_index_lists_seeded_fruits(fruit_client):
    r = fruit_client.get("/fruits")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    for name in ("apple", "pear", "banana"):
        assert name in r.text


def test_show_includes_owner_and_seasons(fruit_client):
    r = fruit_client.get("/fruits/1")
    assert r.status_code == 200
    assert "apple" in r.text
    assert "Tony" in r.text
    assert "No seasons yet." in r.text


def test_show_missing_fruit_is_not_found(fruit_client):
    r = fruit_client.get("/fruits/999")
    assert r.status_code == 404
    assert 'data-code="not_found"' in r.text


def test_show_rejects_non_numeric_id(fruit_client):
    r = fruit_client.get("/fruits/abc")
    assert r.status_code == 422


def test_new_form_lists_owners(fruit_client):
    r = fruit_client.get("/fruits/new")
    assert r.status_code == 200
    assert 'name="readyToEat"' in r.text
    assert "Jill" in r.text


def test_post_fruit_without_checkbox_is_not_ready(fruit_client):
    r = fruit_client.post("/fruits", data={"name": "kiwi", "color": "brown"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/fruits"
    assert _fruit_by_name("kiwi")["readyToEat"] is False


def test_post_fruit_with_checkbox_on_is_ready(fruit_client):
    r = fruit_client.post(
        "/fruits",
        data={"name": "mango", "color": "orange", "readyToEat": "on", "userId": "2"},
        follow_redirects=False,
    )
    assert r.status_code == 303
    mango = _fruit_by_name("mango")
    assert mango["readyToEat"] is True
    assert mango["userId"] == 2


def test_post_fruit_with_blank_name_rerenders_form(fruit_client):
    r = fruit_client.post("/fruits", data={"name": "  ", "color": "red"})
    assert r.status_code == 422
    assert 'class="errors"' in r.text
    assert len(services.list_fruits()) == 3


def test_post_fruit_with_unknown_owner_is_not_found(fruit_client):
    r = fruit_client.post("/fruits", data={"name": "plum", "userId": "77"})
    assert r.status_code == 404
    assert all(f["name"] != "plum" for f in services.list_fruits())


def test_delete_removes_fruit_from_index(fruit_client):
    r = fruit_client.delete("/fruits/2", follow_redirects=False)
    assert r.status_code == 303

    r = fruit_client.get("/fruits")
    assert "pear" not in r.text
    assert fruit_client.get("/fruits/2").status_code == 404


def test_delete_via_method_override(fruit_client):
    r = fruit_client.post("/fruits/3?_method=DELETE", follow_redirects=False)
    assert r.status_code == 303
    assert "banana" not in fruit_client.get("/fruits").text


def test_delete_missing_fruit(fruit_client):
    assert fruit_client.delete("/fruits/999").status_code == 404


def test_edit_form_lists_seasons(fruit_client):
    r = fruit_client.get("/fruits/1/edit")
    assert r.status_code == 200
    for season in ("Summer", "Winter", "Spring", "Autumn"):
        assert season in r.text
    assert "?_method=PUT" in r.text


def test_edit_attaches_season(fruit_client):
    summer = next(s for s in services.list_seasons() if s["name"] == "Summer")
    r = fruit_client.post(
        "/fruits/1?_method=PUT",
        data={"name": "apple", "color": "green", "season": str(summer["id"])},
        follow_redirects=False,
    )
    assert r.status_code == 303

    apple = services.get_fruit(1)
    assert apple["color"] == "green"
    assert apple["readyToEat"] is False
    assert [s["name"] for s in apple["seasons"]] == ["Summer"]
    assert "Summer" in fruit_client.get("/fruits/1").text


def test_edit_same_season_twice_keeps_one_link(fruit_client):
    data = {"name": "apple", "color": "red", "readyToEat": "on", "season": "1"}
    assert fruit_client.put("/fruits/1", data=data, follow_redirects=False).status_code == 303
    assert fruit_client.put("/fruits/1", data=data, follow_redirects=False).status_code == 303
    assert [s["id"] for s in services.get_fruit(1)["seasons"]] == [1]


def test_edit_with_unknown_season(fruit_client):
    r = fruit_client.put("/fruits/1", data={"name": "apple", "season": "99"})
    assert r.status_code == 404
    assert services.get_fruit(1)["seasons"] == []


def test_edit_with_invalid_data_rerenders_form(fruit_client):
    r = fruit_client.put("/fruits/1", data={"name": "", "season": "x"})
    assert r.status_code == 422
    assert services.get_fruit(1)["name"] == "apple"


def test_edit_with_invalid_data_keeps_submitted_values(fruit_client):
    # pear is seeded as not ready to eat
    r = fruit_client.put("/fruits/2", data={"name": "", "color": "purple", "readyToEat": "on"})
    assert r.status_code == 422
    assert 'value="purple"' in r.text
    assert 'value="pear"' not in r.text
    assert "checked" in r.text


def test_unknown_route_renders_error_page(fruit_client):
    r = fruit_client.get("/vegetables")
    assert r.status_code == 404
    assert 'data-code="http_error"' in r.text
