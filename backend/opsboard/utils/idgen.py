"""ID Generation Utilities"""
import uuid
from datetime import datetime, timezone
from typing import Optional


def generate_id(prefix: Optional[str] = None) -> str:
    """
    Generate a unique ID with optional prefix

    Args:
        prefix: Optional prefix for the ID (e.g., 'BI', 'TSK')

    Returns:
        Unique ID string

    Examples:
        >>> generate_id('BI')
        'BI-a1b2c3d4e5f6'
        >>> generate_id()
        'a1b2c3d4e5f6'
    """
    unique_part = uuid.uuid4().hex[:12]

    if prefix:
        return f"{prefix}-{unique_part}"
    return unique_part


def generate_bi_id() -> str:
    """Generate BI ID"""
    return generate_id("BI")


def generate_base_id() -> str:
    """Generate data-source base ID"""
    return generate_id("BASE")


def generate_task_id() -> str:
    """Generate task board ID"""
    return generate_id("TSK")


def generate_series_id() -> str:
    """Generate recurring task series ID"""
    return generate_id("SER")


def generate_automation_id() -> str:
    """Generate automation ID"""
    return generate_id("AUT")


def generate_correlation_id() -> str:
    """
    Generate a correlation ID for request tracing

    Returns:
        Correlation ID string with timestamp prefix
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    unique_part = uuid.uuid4().hex[:8]
    return f"COR-{timestamp}-{unique_part}"
