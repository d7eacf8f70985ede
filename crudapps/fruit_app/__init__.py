"""
Fruit catalogue demo (server-rendered HTML).

- db.py       : Database instance and ORM base
- models.py   : User, Fruit, Season and the SeasonFruit join table
- services.py : CRUD use cases, form parsing, checkbox coercion
- seed.py     : demo users, fruits and seasons
- api_main.py : FastAPI app rendering Jinja2 templates
- cli.py      : migrations / seeders / listings from the shell
"""
