"""
AWS service handles, built once per process and shared read-only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.config import Config as BotoConfig

from .config import Settings

logger = logging.getLogger(__name__)

# Retries are disabled; the translation chain is the only fallback sequence.
_NO_RETRY = BotoConfig(retries={"total_max_attempts": 1, "mode": "standard"})


@dataclass(frozen=True)
class ServiceClients:
    table: Any
    comprehend: Any
    translate: Any
    bedrock: Any


def build_clients(settings: Settings) -> ServiceClients:
    region = settings.bedrock_region
    session = boto3.session.Session(region_name=region)
    clients = ServiceClients(
        table=session.resource("dynamodb", config=_NO_RETRY).Table(settings.table_name),
        comprehend=session.client("comprehend", config=_NO_RETRY),
        translate=session.client("translate", config=_NO_RETRY),
        bedrock=session.client("bedrock-runtime", config=_NO_RETRY),
    )
    logger.info(
        "AWS clients ready (region=%s, table=%s, model=%s)",
        region,
        settings.table_name,
        settings.bedrock_model_id,
    )
    return clients
