"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User record exposed by the /usuarios endpoints.

    Column names follow the public API's Spanish field names so the table
    stays compatible with existing deployments.
    """

    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    name = Column("nombre", String(255), nullable=False)
    email = Column("correo_electronico", String(255), nullable=False, index=True)
    password_hash = Column("contrasena", String(255), nullable=False)
    description = Column("descripcion", String(1024), nullable=False, default="", server_default="")
