from sqlalchemy import Column, Integer, String

from jewelry_store.core.database import Base


class CodeSequence(Base):
    """Highest sequence number ever issued per id prefix, so deleted ids are never reissued."""

    __tablename__ = "code_sequences"

    prefix = Column(String(10), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
