# prodaccess/commands/helpers.py

from __future__ import annotations

import argparse
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from prodaccess.services.errors import ConfigError

ModelT = TypeVar("ModelT", bound=BaseModel)


def prune_opts(model: Type[ModelT], ns: argparse.Namespace) -> ModelT:
    """
    Prune an argparse namespace down to fields the Pydantic model knows about,
    then validate. Unknown args (paths, handler, etc.) are ignored.

    Raises:
        ConfigError: if validation fails.
    """
    data = vars(ns)
    allowed = model.model_fields.keys()
    pruned = {k: data[k] for k in allowed if k in data}

    try:
        return model.model_validate(pruned)
    except ValidationError as e:
        raise ConfigError(f"Invalid options: {e}") from e
