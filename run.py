# run.py
from marketplace import create_app, db
from flask.cli import with_appcontext

app = create_app()


@app.cli.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    print('Database initialized.')


@app.cli.command('drop-db')
@with_appcontext
def drop_db():
    db.drop_all()
    print('Database dropped.')
