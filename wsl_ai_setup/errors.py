from __future__ import annotations


class ProvisionError(RuntimeError):
    pass


class ProvisionAborted(ProvisionError):
    """The operator declined to continue; nothing was changed."""


class StepFailed(ProvisionError):
    def __init__(self, step_id: str, cause: BaseException) -> None:
        self.step_id = step_id
        self.cause = cause
        super().__init__(f"Step {step_id} failed: {cause}")


class InvalidUsername(ProvisionError):
    pass
