"""Request and response models for the board HTTP API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, StrictBool

from ..core.patterns import BLINKER, place_pattern

# 3x3 board holding a vertical blinker
EXAMPLE_BOARD = place_pattern(BLINKER.T, 3, 3, 0, 1).to_rows()


class BoardStateDto(BaseModel):
    """Row-major board state exchanged with clients.

    Cells must be JSON booleans; 1/0 or "true"/"yes" are rejected.
    """

    model_config = ConfigDict(json_schema_extra={'examples': [{'board': EXAMPLE_BOARD}]})

    board: Optional[List[List[StrictBool]]] = None


class BoardIdDto(BaseModel):
    """Identifier returned after uploading a board."""

    model_config = ConfigDict(json_schema_extra={'examples': [{'id': '3f2b8c1e-7d4a-4e59-9a61-0c5d2e8b7f10'}]})

    id: str


class ErrorDto(BaseModel):
    """Error body returned for every failed request."""

    detail: str
    error: str
