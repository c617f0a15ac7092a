import re

from rest_framework.throttling import SimpleRateThrottle

_PERIOD = re.compile(r"^(\d*)\s*([smhd])")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class WindowRateThrottle(SimpleRateThrottle):
    """
    Per-client-address throttle whose rate may name a window length,
    e.g. "3/10m" is three requests per ten minutes. Plain DRF rates
    ("5/min") still parse.
    """

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        num, period = rate.split("/")
        match = _PERIOD.match(period.strip().lower())
        if not match:
            raise ValueError(f"Invalid throttle rate '{rate}'")
        count = int(match.group(1) or 1)
        return (int(num), count * _UNIT_SECONDS[match.group(2)])

    def get_cache_key(self, request, view):
        return self.cache_format % {
            "scope": self.scope,
            "ident": self.get_ident(request),
        }


class ContactSubmissionThrottle(WindowRateThrottle):
    scope = "contact"


class LoginThrottle(WindowRateThrottle):
    scope = "login"


def minutes_until(wait):
    if not wait:
        return 1
    return max(1, int((wait + 59) // 60))
