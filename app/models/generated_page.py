from sqlalchemy import Column, DateTime, String, Text, func

from app.db.base import Base


class GeneratedPage(Base):
    __tablename__ = "generated_pages"

    path = Column(String(512), primary_key=True)
    html = Column(Text, nullable=False)
    generated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
