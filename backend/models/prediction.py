from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class PredictionRequest(BaseModel):
    prompt: str = Field(min_length=1, description="Free-form price summary for the LLM")


class PredictionError(BaseModel):
    """Error body returned by the prediction proxy."""

    error: str
    details: str
    type: Optional[str] = None
    code: Optional[str] = None


class PredictionSuccess(BaseModel):
    status: Literal["success"] = "success"
    text: str

    @property
    def display_text(self) -> str:
        return self.text


class PredictionFailure(BaseModel):
    status: Literal["failure"] = "failure"
    message: str

    @property
    def display_text(self) -> str:
        return self.message


PredictionResult = Annotated[
    Union[PredictionSuccess, PredictionFailure], Field(discriminator="status")
]
