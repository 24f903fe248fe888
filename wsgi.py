"""
WSGI entry point for serverless and container deployments.
Imports the Flask app from main.py and exposes it for Gunicorn or waitress.
"""
from main import app

if __name__ == "__main__":
    app.run()
