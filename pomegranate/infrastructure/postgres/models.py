#pomegranate\infrastructure\postgres\models.py
"""SQLAlchemy ORM models for projects and their deployments."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from pomegranate.infrastructure.postgres.database import Base


class ProjectORM(Base):
    """Project table - groups the deployments of one user."""

    __tablename__ = "projects"

    uuid = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    user_id = Column(String(64), nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    deployments = relationship("DeploymentORM", back_populates="project")


class DeploymentORM(Base):
    """
    Deployment table - one deployed application.

    `config` holds the serialized env-variable set (JSON object).
    A NULL `image_name` means the image is `<user_id>/<deployment uuid>`.
    """

    __tablename__ = "deployments"

    uuid = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    config = Column(Text, nullable=False, default="{}")
    image_name = Column(String(255), nullable=True)
    image_tag = Column(String(128), nullable=False, default="latest")

    project_uuid = Column(String(64), ForeignKey("projects.uuid"), nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    project = relationship("ProjectORM", back_populates="deployments")
