import firebase_admin
from firebase_admin import credentials, db

import config


def get_db_ref(path: str = "/"):
    """Return a Realtime Database reference, initializing the Firebase app on first use."""
    # Initialize Firebase app if not already initialized
    if not firebase_admin._apps:
        db_url = config.firebase_db_url()
        if not db_url:
            raise RuntimeError("🔥 FIREBASE_DB_URL is not set")
        try:
            cred = credentials.Certificate(config.firebase_cred_path())
            firebase_admin.initialize_app(cred, {
                'databaseURL': db_url
            })
        except (ValueError, OSError) as e:
            raise RuntimeError(f"🔥 Firebase initialization failed: {e}") from e

    return db.reference(path)
