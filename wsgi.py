import atexit

from app import create_app, init_db, dispose_db

# WSGI servers (gunicorn, mod_wsgi, PythonAnywhere) look for `application`
application = create_app()
init_db(application)
atexit.register(dispose_db, application)
