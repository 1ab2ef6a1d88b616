# pomegranate/core/repository.py

import json
from abc import ABC, abstractmethod
from typing import Dict

from pomegranate.core.errors import InvalidConfigError
from pomegranate.core.models import Application


def parse_config(config: str) -> Dict[str, str]:
    """
    Parse a serialized env-variable override set.

    Raises:
        InvalidConfigError: If the payload is not a JSON object of strings
    """
    try:
        data = json.loads(config) if config else {}
    except json.JSONDecodeError as e:
        raise InvalidConfigError(f"Configuration is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigError("Configuration must be a JSON object")

    for key, value in data.items():
        if not isinstance(value, str):
            raise InvalidConfigError(f"Value of {key} must be a string")

    return data


class ApplicationRepository(ABC):
    """
    Data-access contract for deployed applications.
    """

    @abstractmethod
    def resolve(self, deployment_id: str) -> Application:
        """
        Build the application descriptor of a deployment.
        Raises ApplicationNotFound if the deployment does not exist.
        """
        raise NotImplementedError

    @abstractmethod
    def resolve_with_config(self, deployment_id: str, env_variables: Dict[str, str]) -> Application:
        """
        Same as resolve, with the given env variables instead of the stored ones.
        """
        raise NotImplementedError

    @abstractmethod
    def apply_config(self, deployment_id: str, config: str) -> None:
        """
        Persist the serialized env-variable set of a deployment.
        Raises ApplicationNotFound or InvalidConfigError.
        """
        raise NotImplementedError
