from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .state_store import load_document


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any]

    @property
    def username(self) -> Optional[str]:
        value = self.raw.get("username")
        return str(value).strip() if value else None

    @property
    def assume_yes(self) -> bool:
        return bool(self.raw.get("assume_yes", False))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def admin_group(self) -> str:
        return str(self.raw.get("admin_group") or "sudo")

    @property
    def shell(self) -> str:
        return str(self.raw.get("shell") or "/bin/bash")

    @property
    def wsl_conf_path(self) -> str:
        return str(self.raw.get("wsl_conf_path") or "/etc/wsl.conf")

    @property
    def system_bashrc(self) -> str:
        return str(self.raw.get("system_bashrc") or "/etc/bash.bashrc")

    @property
    def guard_start_dir(self) -> bool:
        return bool(self.raw.get("guard_start_dir", True))

    @property
    def base_tools(self) -> List[str]:
        return list(self.raw.get("base_tools") or [])

    @property
    def dev_tools(self) -> List[str]:
        return list(self.raw.get("dev_tools") or [])

    @property
    def gpu_groups(self) -> List[str]:
        return list(self.raw.get("gpu_groups") or [])

    # CUDA

    @property
    def _cuda(self) -> Dict[str, Any]:
        return self.raw.get("cuda") or {}

    @property
    def cuda_version(self) -> str:
        return str(self._cuda.get("version") or "12.6")

    @property
    def cuda_version_dashed(self) -> str:
        return self.cuda_version.replace(".", "-")

    @property
    def cuda_home(self) -> str:
        return f"/usr/local/cuda-{self.cuda_version}"

    @property
    def cuda_symlink(self) -> str:
        return str(self._cuda.get("symlink") or "/usr/local/cuda")

    @property
    def cuda_keyring_package(self) -> str:
        return str(self._cuda.get("keyring_package") or "cuda-keyring")

    @property
    def cuda_keyring_filename(self) -> str:
        version = self._cuda.get("keyring_version") or "1.1-1"
        return f"{self.cuda_keyring_package}_{version}_all.deb"

    @property
    def cuda_keyring_url(self) -> str:
        distro = self._cuda.get("repo_distro") or "debian12"
        arch = self._cuda.get("repo_arch") or "x86_64"
        return (
            "https://developer.download.nvidia.com/compute/cuda/repos/"
            f"{distro}/{arch}/{self.cuda_keyring_filename}"
        )

    @property
    def cuda_download_dir(self) -> str:
        return str(self._cuda.get("download_dir") or "/tmp")

    @property
    def cuda_packages(self) -> List[str]:
        v = self.cuda_version_dashed
        extra = list(self._cuda.get("extra_packages") or [])
        return [
            f"cuda-toolkit-{v}",
            *extra,
            f"cuda-compiler-{v}",
            f"cuda-libraries-dev-{v}",
            f"cuda-driver-dev-{v}",
            f"cuda-cudart-dev-{v}",
        ]

    @property
    def cuda_env_lines(self) -> List[str]:
        return [
            f"export PATH={self.cuda_home}/bin:$PATH",
            f"export LD_LIBRARY_PATH={self.cuda_home}/lib64:$LD_LIBRARY_PATH",
        ]

    # Vendor installers

    @property
    def uv_install_url(self) -> str:
        return str((self.raw.get("uv") or {}).get("install_url") or "https://astral.sh/uv/install.sh")

    @property
    def uv_path_line(self) -> str:
        return str((self.raw.get("uv") or {}).get("path_line") or 'export PATH="$HOME/.local/bin:$PATH"')

    @property
    def sdkman_install_url(self) -> str:
        return str((self.raw.get("sdkman") or {}).get("install_url") or "https://get.sdkman.io")


def load_config_overrides(path: str) -> Dict[str, Any]:
    """Read a YAML/JSON config overlay. The file must exist."""

    if not Path(path).exists():
        raise FileNotFoundError(path)
    return load_document(path)
