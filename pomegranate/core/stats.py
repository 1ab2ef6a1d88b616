#pomegranate\core\stats.py
"""Resource usage computation from raw runtime metric samples."""

from typing import Any, Dict, Optional

from pomegranate.core.models import ApplicationStats


def calculate_cpu_percent(
    cpu_delta: float,
    system_delta: float,
    online_cpus: int,
) -> float:
    """
    Per-container CPU utilization between two samples.

    Returns 0.0 unless both deltas are strictly positive.
    """
    if cpu_delta > 0 and system_delta > 0:
        return (cpu_delta / system_delta) * online_cpus * 100.0
    return 0.0


def _total_usage(sample: Dict[str, Any]) -> float:
    return float((sample.get("cpu_usage") or {}).get("total_usage") or 0)


def _system_usage(sample: Dict[str, Any]) -> float:
    return float(sample.get("system_cpu_usage") or 0)


def _online_cpus(sample: Dict[str, Any]) -> int:
    online = sample.get("online_cpus")
    if online:
        return int(online)
    # Older daemons only report the per-CPU breakdown
    return len((sample.get("cpu_usage") or {}).get("percpu_usage") or [])


def stats_from_sample(raw: Optional[Dict[str, Any]]) -> Optional[ApplicationStats]:
    """
    Convert one non-streaming stats response into ApplicationStats.

    Returns None when the runtime returned no sample at all.
    """
    if not raw:
        return None

    current = raw.get("cpu_stats") or {}
    previous = raw.get("precpu_stats") or {}
    memory = raw.get("memory_stats") or {}

    cpu_delta = _total_usage(current) - _total_usage(previous)
    system_delta = _system_usage(current) - _system_usage(previous)

    return ApplicationStats(
        memory_usage=memory.get("usage"),
        memory_limit=memory.get("limit"),
        cpu_usage=calculate_cpu_percent(cpu_delta, system_delta, _online_cpus(current)),
    )
