"""Single-request task envelope: JSON request in, JSON result out."""

import asyncio
import json
import logging
import traceback
from typing import Any, Dict, Optional, Tuple

from dockprov.engine import Provisioner
from dockprov.errors import RequestValidationError
from dockprov.models.config import ProvisionerConfig
from dockprov.models.request import TaskRequest


logger = logging.getLogger(__name__)

ERROR_KIND = "provision/docker_failure"


def error_result(error: BaseException) -> Dict[str, Any]:
    """Structured error document for a failed request."""
    return {
        "_error": {
            "kind": ERROR_KIND,
            "msg": str(error),
            "backtrace": traceback.format_tb(error.__traceback__),
        }
    }


async def execute(request: TaskRequest, provisioner: Provisioner) -> Dict[str, Any]:
    """Dispatch a validated request to the provisioner."""
    if request.action == "provision":
        return await provisioner.provision(request.platform, request.inventory_dir, request.vars)
    return await provisioner.tear_down(request.node_name, request.inventory_dir)


def parse_request(raw: str) -> TaskRequest:
    """Decode and validate a JSON request."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RequestValidationError(f"request is not valid JSON: {e}") from e
    return TaskRequest.from_payload(payload)


def run_task(
    raw: str,
    config: Optional[ProvisionerConfig] = None,
    provisioner: Optional[Provisioner] = None,
) -> Tuple[Dict[str, Any], int]:
    """Run one request, returning the result document and exit code."""
    try:
        request = parse_request(raw)
        provisioner = provisioner or Provisioner(config)
        result = asyncio.run(execute(request, provisioner))
    except Exception as e:
        logger.error(f"Task failed: {e}")
        return error_result(e), 1

    return result, 0
