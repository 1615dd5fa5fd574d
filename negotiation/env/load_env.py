import os
from typing import Callable, Dict, TypeVar

from dotenv import dotenv_values

from .env import Env, PrimaryType

T = TypeVar("T", bound=Env)

TypesMap = Dict[str, Callable[[str], PrimaryType]]


def load_env(
    default: type[T],
    env_file: str | None = None,
    override: T | None = None,
) -> T:
    """
    Build settings from, lowest priority first: model defaults, process
    environment variables, the env file (``.env`` unless given), then the
    fields explicitly set on ``override``.
    """
    types_map = default.types_map()

    values = _from_environ(types_map)
    values.update(_from_env_file(types_map, env_file or ".env"))

    if override is None:
        return default(**values)

    values.update(override.model_dump(exclude_unset=True))
    return type(override)(**values)


def _from_environ(types_map: TypesMap) -> Dict[str, PrimaryType]:
    return {
        envar_name: envar_type(envar_value)
        for envar_name, envar_type in types_map.items()
        if (envar_value := os.getenv(envar_name))
    }


def _from_env_file(types_map: TypesMap, env_file: str) -> Dict[str, PrimaryType]:
    if not os.path.exists(env_file):
        return {}

    return {
        envar_name: types_map[envar_name](envar_value)
        for envar_name, envar_value in dotenv_values(dotenv_path=env_file).items()
        if envar_name in types_map and envar_value
    }
