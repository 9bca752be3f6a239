"""Release ORM model."""

import enum
from datetime import date, datetime

from sqlalchemy import Date, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from label_cms.database import Base
from label_cms.utils.timestamps import utcnow


class ReleaseFormat(enum.StrEnum):
    """Physical or digital format a release is published in."""

    DIGITAL_ALBUM = "Digital Album"
    DIGITAL_SINGLE = "Digital Single"
    DIGITAL_USB_STICK = "Digital USB Stick"
    CD_SINGLE = "CD Single"
    CD_ALBUM = "CD Album"
    VINYL_ALBUM = "Vinyl Album"
    VINYL_SINGLE = "Vinyl Single"
    CASSETTE = "Cassette"


class Release(Base):
    """A published album or single.

    Tracks reference releases by ``release_id`` and are removed together
    with their release by ``ReleaseRepository.delete``.
    """

    __tablename__ = "releases"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    artist: Mapped[str] = mapped_column(String(255))
    release_date: Mapped[date] = mapped_column(Date, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    format: Mapped[ReleaseFormat] = mapped_column(
        Enum(
            ReleaseFormat,
            name="release_format",
            native_enum=False,
            length=32,
            values_callable=lambda formats: [f.value for f in formats],
        )
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    audio_preview_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    youtube_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    spotify_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    apple_music_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    store_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)
