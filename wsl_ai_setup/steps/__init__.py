from .step_00_confirm import ConfirmStep
from .step_10_ensure_user import EnsureUserStep
from .step_15_write_wsl_conf import WriteWslConfStep
from .step_18_shell_start_dir import ShellStartDirStep
from .step_20_update_packages import UpdatePackagesStep
from .step_25_base_tools import BaseToolsStep
from .step_30_cuda_repo import CudaRepoStep
from .step_35_cuda_toolkit import CudaToolkitStep
from .step_40_cuda_env import CudaEnvStep
from .step_45_dev_tools import DevToolsStep
from .step_50_uv import UvStep
from .step_60_sdkman import SdkmanStep
from .step_70_gpu_groups import GpuGroupsStep
from .step_80_cleanup import CleanupStep
from .step_90_summary import SummaryStep

__all__ = [
    "ConfirmStep",
    "EnsureUserStep",
    "WriteWslConfStep",
    "ShellStartDirStep",
    "UpdatePackagesStep",
    "BaseToolsStep",
    "CudaRepoStep",
    "CudaToolkitStep",
    "CudaEnvStep",
    "DevToolsStep",
    "UvStep",
    "SdkmanStep",
    "GpuGroupsStep",
    "CleanupStep",
    "SummaryStep",
]
