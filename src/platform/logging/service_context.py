"""
Service context for log lines.

Every log record carries `SERVICE_NAME@DEPLOY_ENV:instance` so that lines from
several API workers (or gate-facing replicas) can be told apart once shipped.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticketing')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container orchestrators expose a hostname per replica; fall back to the PID locally
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
