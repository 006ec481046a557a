#!/usr/bin/env python3

"""VolumeBot utility functions."""

from pathlib import Path
from typing import Dict, Union

from yaml import YAMLError, safe_load


def load_yaml_file(path: Path) -> Dict:
    """Loads a YAML file and returns it as a dictionary.

    Args:
        path (Path): File path.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is no valid YAML or does not contain a mapping.

    Returns:
        Dict: Content of the file. An empty file results in an empty dictionary.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Unable to load YAML file '{path}': File does not exist.")

    with open(path.absolute(), "r", encoding="utf-8") as file:
        try:
            content = safe_load(file)
        except YAMLError as error:
            raise ValueError(f"Unable to parse YAML file '{path}': {error}") from error

    if content is None:
        return {}

    if not isinstance(content, dict):
        raise ValueError(f"Unable to load YAML file '{path}': Top level element must be a mapping.")

    return content


def path_to_string(path: Union[str, Path], delim: str = "_") -> str:
    """Creates a string from the specified path. Path delimiters '/' are replaced by the specified delimiter.

    A leading '/' is replaced as well, so '/var/lib' becomes '_var_lib'.

    Args:
        path (Union[str, Path]): Path.
        delim (str, optional): Replacement for '/'. Defaults to "_".

    Returns:
        str: String version of the path.
    """
    return str(path).replace("/", delim)
