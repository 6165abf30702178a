from __future__ import annotations

import logging
import os
from typing import List

from ..actions import Action, DownloadFile, RemoveFile
from ..context import RunContext
from ..lib.pkg import apt_update, dpkg_install
from ..pipeline import BaseStep

logger = logging.getLogger(__name__)


class CudaRepoStep(BaseStep):
    step_id = "30_cuda_repo"
    title = "Install CUDA repository"

    def plan(self, ctx: RunContext) -> List[Action]:
        cfg = ctx.config
        if ctx.host.package_installed(cfg.cuda_keyring_package):
            logger.info("CUDA keyring already installed")
            return []

        deb = os.path.join(cfg.cuda_download_dir, cfg.cuda_keyring_filename)
        ctx.decide("cuda_keyring_url", cfg.cuda_keyring_url)
        return [
            DownloadFile(url=cfg.cuda_keyring_url, dest=deb),
            dpkg_install(deb),
            RemoveFile(path=deb),
            apt_update(),
        ]
