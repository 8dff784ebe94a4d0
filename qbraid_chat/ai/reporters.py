"""
Status Reporters

Answer the two structured questions the chat understands: which devices
are online right now, and how the latest job is doing. Reporters never
raise. Every failure becomes a readable reply so the transcript always
shows something, and the detail goes to the log.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from qbraid_chat.time_utils import to_locale_string

from .client import DEVICES_PATH, JOBS_PATH, QBraidClient, QBraidClientError
from .models import Reply

logger = logging.getLogger(__name__)

NO_DEVICES_MESSAGE = "No devices are currently available."
NO_JOBS_MESSAGE = "No recent quantum jobs found."
NO_PRICING_MESSAGE = "No pricing information available"
MISSING = "N/A"

DEVICE_QUERY_PARAMS = {"status": "ONLINE", "isAvailable": "true"}
JOB_QUERY_PARAMS = {"limit": 5}

_PRICING_UNITS = (
    ("perTask", "task"),
    ("perShot", "shot"),
    ("perMinute", "minute"),
)


def format_value(value: Any) -> str:
    """Render a JSON scalar for display; 2.0 renders as 2, None as N/A."""
    if value is None:
        return MISSING
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_pricing(pricing: Any) -> str:
    """
    Summarize device pricing.

    >>> format_pricing({"perShot": 1, "perMinute": 3})
    '1 credits/shot, 3 credits/minute'
    """
    if not isinstance(pricing, dict):
        return NO_PRICING_MESSAGE

    parts = [
        f"{format_value(pricing[key])} credits/{unit}"
        for key, unit in _PRICING_UNITS
        if pricing.get(key)
    ]
    return ", ".join(parts) if parts else NO_PRICING_MESSAGE


def format_device(device: dict[str, Any]) -> str:
    """One bullet line for a device."""
    return (
        f"• {format_value(device.get('name'))} ({format_value(device.get('provider'))}),"
        f" Type: {format_value(device.get('type'))},"
        f" Qubits: {format_value(device.get('numberQubits'))},"
        f" Status: {format_value(device.get('status'))},"
        f" Pending Jobs: {format_value(device.get('pendingJobs'))},"
        f" Next Available: {to_locale_string(device.get('nextAvailable'))},"
        f" Pricing: {format_pricing(device.get('pricing'))}"
    )


def format_devices(data: Any) -> str:
    """Render the device listing response."""
    devices = [d for d in data if isinstance(d, dict)] if isinstance(data, list) else []
    if not devices:
        return NO_DEVICES_MESSAGE

    body = "\n\n".join(format_device(device) for device in devices)
    return f"Currently available quantum devices:\n\n{body}"


def format_job(job: dict[str, Any]) -> str:
    """Render the latest-job report. Lines that do not apply are left out."""
    timestamps = job.get("timeStamps")
    if not isinstance(timestamps, dict):
        timestamps = {}
    status = job.get("status")

    lines = [
        "Latest quantum job status:",
        f"- Job ID: {format_value(job.get('qbraidJobId'))}",
        f"- Status: {format_value(status)}",
        f"- Device: {format_value(job.get('qbraidDeviceId'))}",
        f"- Circuit Info: {format_value(job.get('circuitNumQubits'))} qubits,"
        f" depth {format_value(job.get('circuitDepth'))}",
        f"- Shots: {format_value(job.get('shots'))}",
        f"- Created: {to_locale_string(timestamps.get('createdAt'))}",
    ]

    if timestamps.get("endedAt"):
        lines.append(f"- Completed: {to_locale_string(timestamps['endedAt'])}")
    if timestamps.get("executionDuration"):
        lines.append(f"- Duration: {format_value(timestamps['executionDuration'])}ms")
    if status == "QUEUED":
        lines.append(
            f"- Queue Position: {format_value(job.get('queuePosition'))}"
            f" of {format_value(job.get('queueDepth'))}"
        )
    if job.get("cost"):
        lines.append(f"- Cost: {format_value(job['cost'])} credits")
    elif job.get("escrow"):
        lines.append(f"- Estimated Cost: {format_value(job['escrow'])} credits")
    if job.get("measurementCounts") is not None:
        counts = json.dumps(job["measurementCounts"], indent=2)
        lines.append(f"- Results: {counts}")

    return "\n".join(lines)


def latest_job(data: Any) -> dict[str, Any] | None:
    """
    Pick the latest job from the jobs envelope.

    The API lists jobs newest first, so element 0 is taken as-is.
    """
    jobs = data.get("jobsArray") if isinstance(data, dict) else None
    if not isinstance(jobs, list) or not jobs:
        return None
    first = jobs[0]
    return first if isinstance(first, dict) else None


class DeviceStatusReporter:
    """Reports online, available quantum devices."""

    def __init__(self, client: QBraidClient):
        self.client = client

    def fetch_reply(self, credential: str | None) -> Reply:
        try:
            data = self.client.get_json(
                DEVICES_PATH,
                credential,
                params=DEVICE_QUERY_PARAMS,
                action="fetch devices",
            )
            return Reply(text=format_devices(data))
        except QBraidClientError as e:
            logger.warning("Device status query failed: %s", e)
            return Reply(text=f"Error fetching devices: {e}", error=str(e))
        except Exception as e:
            logger.exception("Unexpected error rendering devices: %s", e)
            return Reply(text=f"Error fetching devices: {e}", error=str(e))

    def report(self, credential: str | None) -> str:
        return self.fetch_reply(credential).text


class JobStatusReporter:
    """Reports the status of the most recent quantum job."""

    def __init__(self, client: QBraidClient):
        self.client = client

    def fetch_reply(self, credential: str | None) -> Reply:
        try:
            data = self.client.get_json(
                JOBS_PATH,
                credential,
                params=JOB_QUERY_PARAMS,
                action="fetch job status",
            )
            job = latest_job(data)
            if job is None:
                return Reply(text=NO_JOBS_MESSAGE)
            return Reply(text=format_job(job))
        except QBraidClientError as e:
            logger.warning("Job status query failed: %s", e)
            return Reply(text=f"Error fetching job status: {e}", error=str(e))
        except Exception as e:
            logger.exception("Unexpected error rendering job status: %s", e)
            return Reply(text=f"Error fetching job status: {e}", error=str(e))

    def report(self, credential: str | None) -> str:
        return self.fetch_reply(credential).text
