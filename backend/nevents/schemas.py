import os
from pydantic import BaseModel, Field, conint, field_validator, model_validator
from typing import List, Optional, Union
from nevents.engine.tail_probability import DEFAULT_PRECISION

MAX_EVENTS = int(os.environ.get("NEVENTS_MAX_EVENTS", "2000"))
MAX_PRECISION = int(os.environ.get("NEVENTS_MAX_PRECISION", "1000"))
# limite de trabalho por requisição: eventos x dígitos
MAX_DIGIT_BUDGET = int(os.environ.get("NEVENTS_MAX_DIGIT_BUDGET", "200000"))

ProbabilityLiteral = Union[str, int, float]

def reject_booleans(v):
    # antes da coerção: JSON true viraria 1
    if not isinstance(v, list):
        return v
    bad = [i for i, x in enumerate(v) if isinstance(x, bool)]
    if bad:
        raise ValueError(f"Valores booleanos nas posições: {bad}")
    return v

def check_budget(events: int, precision: Optional[int]):
    prec = DEFAULT_PRECISION if precision is None else precision
    if events * prec > MAX_DIGIT_BUDGET:
        raise ValueError(f"{events} eventos x {prec} dígitos excede o limite de {MAX_DIGIT_BUDGET}")

class AtLeastNRequest(BaseModel):
    n: int = Field(..., description="Número mínimo de eventos que devem ocorrer (qualquer inteiro)")
    probabilities: List[ProbabilityLiteral] = Field(..., max_length=MAX_EVENTS, description="Probabilidade de cada evento independente, de preferência como string decimal")
    precision: Optional[conint(ge=1, le=MAX_PRECISION)] = Field(default=None, description="Dígitos significativos da aritmética decimal")
    prune: Optional[bool] = Field(default=True, description="Ignora células da tabela que não afetam o resultado")

    @field_validator('probabilities', mode='before')
    @classmethod
    def no_booleans(cls, v):
        return reject_booleans(v)

    @model_validator(mode="after")
    def within_budget(self):
        check_budget(len(self.probabilities), self.precision)
        return self

class AtLeastNResponse(BaseModel):
    engine_version: str
    n: int
    events: int
    precision: int
    probability: str

class DistributionRequest(BaseModel):
    probabilities: List[ProbabilityLiteral] = Field(..., max_length=MAX_EVENTS)
    precision: Optional[conint(ge=1, le=MAX_PRECISION)] = None

    @field_validator('probabilities', mode='before')
    @classmethod
    def no_booleans(cls, v):
        return reject_booleans(v)

    @model_validator(mode="after")
    def within_budget(self):
        check_budget(len(self.probabilities), self.precision)
        return self

class DistributionResponse(BaseModel):
    engine_version: str
    events: int
    precision: int
    exact: List[str]

class Health(BaseModel):
    status: str
    engine_version: str
