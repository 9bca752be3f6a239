"""Track ORM model."""

from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from label_cms.database import Base
from label_cms.utils.timestamps import utcnow


class Track(Base):
    """A song belonging to a release."""

    __tablename__ = "tracks"

    id: Mapped[int] = mapped_column(primary_key=True)
    # Plain indexed column, no foreign key: tracks may be ingested before their release
    release_id: Mapped[int] = mapped_column(index=True)
    track_number: Mapped[int] = mapped_column()
    artist: Mapped[str] = mapped_column(String(255))
    title: Mapped[str] = mapped_column(String(255))
    length: Mapped[str] = mapped_column(String(10))  # M:SS or MM:SS
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
