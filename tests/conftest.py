from __future__ import annotations

import os
import tempfile

# Settings() is built at import time; provide the required values before any test imports the app.
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("TOKEN_SECRET", "router-test-secret-with-at-least-32-bytes")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("IMAGES_DIR", tempfile.mkdtemp(prefix="sauce-images-"))
