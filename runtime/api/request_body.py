"""Request body parsing shared by the logbook routes.

Bodies are parsed by hand rather than through FastAPI's automatic body
injection so each route controls the order of its checks (identifier or
credential first, then JSON, then the required field) and every failure
comes out as a 400 MalformedRequestError.
"""

from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from exceptions.exceptions import MalformedRequestError


ModelT = TypeVar("ModelT", bound=BaseModel)


async def parse_json_body(request: Request, model: Type[ModelT], field: str) -> ModelT:
    """Parse the request body as JSON and validate it against `model`.

    Raises
    ------
    MalformedRequestError
        If the body is not valid JSON, or `field` is missing or not a string.
    """
    try:
        data = await request.json()
    except ValueError:
        raise MalformedRequestError("Invalid JSON")

    try:
        return model.model_validate(data)
    except ValidationError:
        raise MalformedRequestError(f"Missing {field} field")
