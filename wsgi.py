"""
WSGI entry point for PythonAnywhere deployment.

This file is used by PythonAnywhere to serve the Flask application.
PythonAnywhere looks for a variable named 'application' in this file.
"""

import sys
import os

# Detect if running on PythonAnywhere
is_pythonanywhere = 'PYTHONANYWHERE_DOMAIN' in os.environ

if is_pythonanywhere:
    # PythonAnywhere path structure
    username = os.environ.get('USERNAME', 'username')
    path = f'/home/{username}/surfcast'
else:
    # Local development - use current directory
    path = os.path.dirname(os.path.abspath(__file__))

# Add project directory to path
if path not in sys.path:
    sys.path.insert(0, path)

os.environ.setdefault('FLASK_ENV', 'production' if is_pythonanywhere else 'development')

# Import Flask app
from surfcast.api.server import app

# PythonAnywhere looks for 'application'
application = app

# For local testing
if __name__ == '__main__':
    app.run(debug=not is_pythonanywhere)
