from pydantic import BaseModel, Field


class CleanupReport(BaseModel):
    """Outcome of one garbage collection run."""

    expired_deleted: int = Field(0, description="Sessions removed after their retention window")
    hidden_reclaimed: int = Field(0, description="Hidden sessions removed early because nobody submitted")
    failed_sweeps: list[str] = Field(default_factory=list, description="Names of sweeps that raised")
