"""
Test configuration applied before the application is imported.

Settings are read once at import time, so the database URL, token secrets and
a cheap bcrypt cost must be in the environment before any app module loads.
"""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
