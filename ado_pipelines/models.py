from pydantic import BaseModel, ConfigDict, Field


class Pipeline(BaseModel):
    """
    Represents an Azure DevOps pipeline.
    """

    id: int
    name: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class PipelineListResult(BaseModel):
    """
    Represents one page of the pipelines listing response.

    ``count`` is reported by the service and is not checked against the
    length of ``pipelines``.
    """

    count: int = 0
    pipelines: list[Pipeline] = Field(default_factory=list, alias="value")
    continuation_token: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @property
    def has_more(self) -> bool:
        """True when the service indicated results beyond this page."""
        return bool(self.continuation_token)
