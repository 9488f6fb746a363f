import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from core.base import Base


class VoteChoice(str, enum.Enum):
    AGREE = "agree"
    OPPOSE = "oppose"


class Vote(Base):
    __tablename__ = "votes"

    # one vote per client address; the store enforces it, not the handlers
    ip: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    choice: Mapped[VoteChoice] = mapped_column(
        Enum(
            VoteChoice,
            name="vote_choice",
            native_enum=False,
            create_constraint=True,
            length=16,
            values_callable=lambda choices: [c.value for c in choices],
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
