"""Marker path configuration model."""

from pydantic import BaseModel, Field


class MarkerConfig(BaseModel):
    """Configuration for the marker path gate.

    The check only runs when the marker path is a directory holding at least
    one entry whose name starts with ``prefix``.

    Attributes:
        enabled: Whether the gate is evaluated (False = check always runs)
        path: Marker directory, usually a mounted ConfigMap
        prefix: Required file name prefix
    """

    enabled: bool = True
    path: str = "/etc/flink-cluster-config"
    prefix: str = Field("executionPlan-", min_length=1)
