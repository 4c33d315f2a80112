from typing import List
from sqlalchemy.orm import Session

from tracker.models import Section
from tracker.schemas import SectionOut
from .base import BaseRepository


class SectionRepository(BaseRepository[Section]):
    """Repository for user-defined sections."""

    def __init__(self, db: Session):
        super().__init__(db, Section)

    def list_for_user(self, user_id: str) -> List[Section]:
        return self.list_by_user(user_id, Section.sort_order.asc(), Section.created_at.asc())

    def create(self, user_id: str, section_id: str, name: str, color: str, icon: str, sort_order: int) -> Section:
        section = Section(
            id=section_id,
            user_id=user_id,
            name=name,
            color=color,
            icon=icon,
            sort_order=sort_order
        )
        return self.add(section)

    def to_schema(self, section: Section) -> SectionOut:
        return SectionOut.model_validate(section)
