from sqlalchemy import Column, DateTime, Integer, String

from boilerplate.db.base import Base


class ForgotPassword(Base):
    __tablename__ = "forgot_passwords"

    id = Column(Integer, primary_key=True, index=True)
    # Logically tied to users.email; no foreign key constraint
    email = Column(String(320), nullable=False, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)
