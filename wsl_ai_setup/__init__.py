"""WSL Debian AI/ML provisioner (Python-first, probe-driven).

Core design goals:
- Idempotent steps guarded by host probes
- Planning separated from execution (dry-run friendly)
- Explicit run-as for user-scoped installers
- Centralized logging
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
