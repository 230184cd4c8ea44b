# app.py (gunicorn + local)

from dotenv import load_dotenv

# .env must be loaded before the config is read
load_dotenv()

from purchy_backend.app import create_app


# gunicorn app:app
app = create_app()


# Local run only
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"])
