from flask import Flask
from flask_cors import CORS
import os
import logging
from dotenv import load_dotenv

# Load environment variables before anything reads them
load_dotenv()

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

from analyzer.routes.analyze_routes import analyze_bp

CORS_METHODS = ["GET", "OPTIONS", "PATCH", "DELETE", "POST", "PUT"]
CORS_HEADERS = [
    "X-CSRF-Token", "X-Requested-With", "Accept", "Accept-Version",
    "Content-Length", "Content-MD5", "Content-Type", "Date", "X-Api-Version"
]

app = Flask(__name__)

# Behind the hosting platform's reverse proxy
from werkzeug.middleware.proxy_fix import ProxyFix
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

CORS(app,
     resources={r"/api/*": {
         "origins": "*",
         "send_wildcard": True,
         "methods": CORS_METHODS,
         "allow_headers": CORS_HEADERS,
         "supports_credentials": False
     }})

app.register_blueprint(analyze_bp)
logger.info(f"Contract analyzer ready (default provider: {os.getenv('LLM_PROVIDER', 'groq')})")

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=int(os.getenv('PORT', '5000')))
