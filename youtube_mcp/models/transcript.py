from pydantic import BaseModel, ConfigDict, Field, model_validator

class TranscriptSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start_ms: int = Field(ge=0)
    end_ms: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "TranscriptSegment":
        if self.end_ms < self.start_ms:
            raise ValueError("end_ms must not be before start_ms")
        return self

class TranscriptChunk(BaseModel):
    text: str
    start_ms: int
    end_ms: int
