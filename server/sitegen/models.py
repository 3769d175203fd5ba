from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    prompt: str = ""


class CodeBundle(BaseModel):
    html: str = Field("", description="Markup extracted from the ```html block")
    css: str = Field("", description="Styles extracted from the ```css block")
    js: str = Field("", description="Script extracted from the ```js / ```javascript block")


class GenerationStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL_PARSE = "partial_parse"
    UPSTREAM_EMPTY = "upstream_empty"


class GenerateResponse(BaseModel):
    id: str
    code: CodeBundle
    status: GenerationStatus = GenerationStatus.SUCCESS
    warnings: List[str] = []
