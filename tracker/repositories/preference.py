from typing import Optional
from sqlalchemy.orm import Session

from tracker.models import UserPreference


class PreferenceRepository:
    """Per-user preference row (currently only the theme)."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[UserPreference]:
        return self.db.get(UserPreference, user_id)

    def upsert(self, user_id: str, theme: str) -> UserPreference:
        prefs = self.get(user_id)
        if prefs is None:
            prefs = UserPreference(user_id=user_id, theme=theme)
            self.db.add(prefs)
        else:
            prefs.theme = theme
        self.db.flush()
        return prefs
