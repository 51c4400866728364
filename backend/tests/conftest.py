"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach real services or use production secrets
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
# Cheap KDF keeps signup/signin tests fast
os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "test-cloud")
