import asyncio
import time
from enum import Enum
from core.errors import BaseIdError
from identifier.layout import EPOCH_MS, MAX_TIMESTAMP
from utils.timestamp import format_timestamp

class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"

class CheckResult:
    __slots__ = ("name", "status", "msg")

    def __init__(self, name, status, msg=""):
        self.name = name
        self.status = status
        self.msg = msg

    def to_dict(self):
        return {"name": self.name,
                "status": self.status.value,
                "msg": self.msg}

class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")

    def __init__(self, status, checks, uptime=0):
        self.status = status
        self.checks = checks
        self.uptime = uptime
        self.timestamp = format_timestamp()

    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}

class HealthChecker:
    def __init__(self, ttl=1.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._start_time = time.time()

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    @property
    def uptime(self):
        return time.time() - self._start_time

    async def check(self):
        now = time.time()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        results = []
        for name, (check_fn, is_critical) in self._checks.items():
            try:
                result = await asyncio.wait_for(check_fn(), timeout=5)
            except asyncio.TimeoutError:
                result = CheckResult(name, Status.FAIL, "timeout")
            except Exception as exc:
                result = CheckResult(name, Status.FAIL, str(exc))
            results.append((result, is_critical))

        status = Status.OK
        for result, is_critical in results:
            if result.status == Status.FAIL and is_critical:
                status = Status.FAIL
            elif result.status != Status.OK and status == Status.OK:
                status = Status.DEGRADED

        self._cache = HealthReport(status, [result for result, _ in results], now - self._start_time)
        self._cache_time = now
        return self._cache

# Checks
async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)

def create_random_check(get_source):
    """Draws 64 bits from whatever source get_source() currently returns."""
    async def check():
        source = get_source()
        if source is None:
            return CheckResult("random", Status.FAIL, "not configured")
        try:
            source()
        except BaseIdError as exc:
            return CheckResult("random", Status.FAIL, str(exc))
        return CheckResult("random", Status.OK)
    return check

def create_clock_check(get_clock, headroom_ms=365 * 24 * 3600 * 1000):
    async def check():
        elapsed = get_clock()() - EPOCH_MS
        if elapsed < 0 or elapsed > MAX_TIMESTAMP:
            return CheckResult("clock", Status.FAIL, f"out of range: {elapsed}")
        # Less than a year of 48-bit range left
        if MAX_TIMESTAMP - elapsed < headroom_ms:
            return CheckResult("clock", Status.DEGRADED, "near range end")
        return CheckResult("clock", Status.OK, f"t{elapsed}")
    return check
