"""
Run the analyzer with the Waitress WSGI server.
"""
import os
from waitress import serve
from main import app, logger

if __name__ == '__main__':
    port = int(os.getenv('PORT', '5000'))
    threads = int(os.getenv('WAITRESS_THREADS', '4'))
    logger.info(f"Starting contract analyzer with Waitress on port {port} ({threads} threads)")
    serve(app, host='0.0.0.0', port=port, threads=threads)
