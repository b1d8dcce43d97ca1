"""
Status API Pydantic schemas.
"""
from typing import List

from pydantic import BaseModel


class ServiceInfo(BaseModel):
    service: str
    status: str
    message: str


class HealthResponse(BaseModel):
    status: str
    update_loop: str


class StatusResponse(BaseModel):
    name: str
    version: str
    signer_address: str
    contract_addresses: List[str]
    update_interval_seconds: int
    update_method: str
