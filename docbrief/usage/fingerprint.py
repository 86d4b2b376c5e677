import getpass
import hashlib
import locale
import os
import platform
import time
import uuid

from docbrief.logging.logger import Log

_cached_fingerprint: str | None = None


def collect_signals() -> dict[str, str]:
    """Host characteristics that stay stable for one user on one machine."""
    signals: dict[str, str] = {
        "platform": platform.platform(),
        "machine": platform.machine(),
        "node": platform.node(),
        "python": platform.python_version(),
        "cpu_count": str(os.cpu_count() or "unknown"),
        "timezone": time.strftime("%Z"),
        "language": locale.getlocale()[0] or "unknown",
        "mac": format(uuid.getnode(), "x"),
    }
    try:
        signals["user"] = getpass.getuser()
    except Exception:
        signals["user"] = "unavailable"
    return signals


def generate_fingerprint() -> str:
    signals = collect_signals()
    signal_string = "|".join(f"{key}:{value}" for key, value in sorted(signals.items()))
    digest = hashlib.sha256(signal_string.encode("utf-8")).hexdigest()[:16]
    return f"fp_{digest}"


def get_fingerprint() -> str:
    """Identity token forwarded with analysis calls for server-side rate limiting."""
    global _cached_fingerprint  # noqa: PLW0603
    if _cached_fingerprint is None:
        try:
            _cached_fingerprint = generate_fingerprint()
        except Exception as exc:
            Log.warning(f"Fingerprint generation failed, using random fallback: {exc}")
            _cached_fingerprint = f"fp_fallback_{uuid.uuid4().hex[:13]}"
    return _cached_fingerprint
