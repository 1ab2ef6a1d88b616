from typing import Dict, List

from pydantic import BaseModel, Field


class DeployRequest(BaseModel):
    container_name: str = Field(..., description="Unique application container name")
    image_name: str = Field(..., description="Docker image (e.g., 'nginx')")
    image_tag: str = Field(default="latest", description="Image tag")
    env_vars: Dict[str, str] = Field(default_factory=dict, description="Environment variables")


class DeleteImageRequest(BaseModel):
    container_name: str
    image_name: str
    image_tag: str = "latest"


class StatusRequest(BaseModel):
    container_names: List[str]


class ContainerStatus(BaseModel):
    container_name: str
    container_status: int
    status: str


class StatusResponse(BaseModel):
    container_statuses: List[ContainerStatus]


class LogsResponse(BaseModel):
    logs: str


class StatsResponse(BaseModel):
    cpu_usage: float
    memory_usage: int
    memory_limit: int


class ApplyConfigRequest(BaseModel):
    config: str = Field(..., description="JSON object of environment variables")


class MessageResponse(BaseModel):
    status: str
    container_name: str
