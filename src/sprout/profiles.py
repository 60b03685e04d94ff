"""Template text and directory layout for each :class:`TemplateProfile`.

Paths and contents are templates rendered with
:class:`~sprout.template.TemplateRenderer`; project supplied values always go
through the escape filter matching the target file format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

from .config import TemplateProfile

__all__ = ["PROFILE_LAYOUTS", "ProfileLayout", "layout_for"]


GITIGNORE_TEMPLATE = """# Python stuff
{{ venv_dir }}/
__pycache__/
*.pyc
*.pyo
*.pyd
.python-version
*.ipynb_checkpoints

# Build artifacts
build/
dist/
*.egg-info/
*.egg

# macOS stuff
.DS_Store

# IDE stuff
.vscode/
.idea/

# Streamlit secrets
.streamlit/secrets.toml

# DuckDB files
*.db
*.db.wal

# Test artifacts
.pytest_cache/
htmlcov/
.coverage
"""

ENV_INFO_TEMPLATE = """# Python virtual environment information for project: {{ name|env }}

# Absolute path to the Python interpreter within the virtual environment:
PYTHON_INTERPRETER="{{ interpreter|env }}"

# Command to activate the virtual environment in your shell:
ACTIVATE_COMMAND="{{ activate_command|env }}"

# Environment created using: {{ installer|env }}
"""

NOTEBOOK_TEMPLATE = """{
 "cells": [
  {
   "cell_type": "markdown",
   "metadata": {},
   "source": [
    "# {{ name|json }}: initial exploration"
   ]
  },
  {
   "cell_type": "code",
   "execution_count": null,
   "metadata": {},
   "outputs": [],
   "source": [
    "import pandas as pd"
   ]
  }
 ],
 "metadata": {
  "kernelspec": {
   "display_name": "Python 3",
   "language": "python",
   "name": "python3"
  },
  "language_info": {
   "name": "python"
  }
 },
 "nbformat": 4,
 "nbformat_minor": 4
}
"""

LOGIC_TEMPLATE = '''"""Sample logic for {{ name|py }}."""


def add_one(number: int) -> int:
    """Adds one to the given number."""
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError("Input must be an integer")
    return number + 1
'''

STREAMLIT_APP_TEMPLATE = '''import time

import duckdb
import streamlit as st

from src.logic import add_one

PROJECT_NAME = "{{ name|py }}"

st.set_page_config(layout="wide")

st.title("My New Data App!")

st.write(f"Project: **{PROJECT_NAME}**")
st.write(f"Testing logic: 1 + 1 = {add_one(1)}")


@st.cache_resource
def get_duckdb_connection():
    conn = duckdb.connect(database=":memory:", read_only=False)
    st.toast("DuckDB connection established.")
    return conn


@st.cache_data(ttl=600)
def create_sample_data(_conn):
    _conn.execute("CREATE OR REPLACE TABLE sample_data AS SELECT range AS id, random() AS value FROM range(10)")
    df = _conn.execute("SELECT * FROM sample_data").fetchdf()
    time.sleep(1)
    return df


st.header("Sample Data")

conn = get_duckdb_connection()

if st.button("Load/Refresh Sample Data"):
    df = create_sample_data(conn)
    st.dataframe(df)
    st.success(f"Loaded {len(df)} rows from DuckDB.")
else:
    st.info("Click the button to load data.")

st.sidebar.header("Options")
option = st.sidebar.selectbox("Choose an option", ["A", "B", "C"])
st.sidebar.write("You selected:", option)

st.write("---")
st.write("Explore more in the `notebooks/` directory!")
'''

README_MINIMAL_TEMPLATE = """# {{ name|md }}

A new Python project set up with {{ installer|md }}.

## Setup

1. **Environment info:** check `{{ env_info_file }}` for the interpreter path and activation command.

2. **Activate the environment:**

   ```bash
   source {{ venv_dir }}/bin/activate
   ```

3. **Reproduce the environment** after cloning or changing dependencies:

   ```bash
   pip install -r {{ lock_file }}
   ```

## Running the app

```bash
streamlit run src/app.py
```

## Notebooks

Exploratory work lives in `notebooks/`. Start Jupyter Lab with:

```bash
jupyter lab
```

## IDE configuration

Point VS Code or PyCharm at the interpreter recorded in `{{ env_info_file }}`.
"""

README_PACKAGED_TEMPLATE = """# {{ name|md }}

A packaged Python project set up with {{ installer|md }}.

## Setup

1. **Environment info:** check `{{ env_info_file }}` for the interpreter path and activation command.

2. **Activate the environment:**

   ```bash
   source {{ venv_dir }}/bin/activate
   ```

3. **Install the project** in editable mode with its development extras:

   ```bash
   pip install -e .[dev]
   ```

   Exact versions of the initial environment are pinned in `{{ lock_file }}`.

## Running

```bash
python -m {{ package_name }}.main
```

## Running tests

```bash
pytest
```

## Notebooks

Exploratory work lives in `notebooks/`. Start Jupyter Lab with `jupyter lab`.
"""

PYPROJECT_TEMPLATE = """[build-system]
requires = ["setuptools>=65.0"]
build-backend = "setuptools.build_meta"

[project]
name = "{{ distribution_name|toml }}"
version = "0.1.0"
description = "{{ name|toml }}"
readme = "README.md"
requires-python = ">=3.10"
dependencies = {{ libraries|toml_array }}

[project.optional-dependencies]
dev = ["pytest"]

[project.scripts]
"{{ distribution_name|toml }}" = "{{ package_name }}.main:main"

[tool.setuptools]
package-dir = {"" = "src"}
packages = ["{{ package_name }}"]

[tool.pytest.ini_options]
testpaths = ["tests"]
pythonpath = ["src"]
"""

PACKAGE_INIT_TEMPLATE = '"""Top level package for {{ name|py }}."""\n\n__all__ = ["__version__"]\n__version__ = "0.1.0"\n'

PACKAGE_MAIN_TEMPLATE = '''"""Command line entry point for {{ name|py }}."""

from {{ package_name }}.logic import add_one

PROJECT_NAME = "{{ name|py }}"


def main() -> int:
    print(f"{PROJECT_NAME}: 1 + 1 = {add_one(1)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
'''

PACKAGE_TEST_TEMPLATE = '''"""Tests for {{ package_name }}.logic."""

import pytest

from {{ package_name }}.logic import add_one


def test_add_one_success():
    assert add_one(3) == 4
    assert add_one(0) == 1
    assert add_one(-1) == 0


def test_add_one_type_error():
    with pytest.raises(TypeError):
        add_one("hello")
    with pytest.raises(TypeError):
        add_one(5.5)
'''


@dataclass(frozen=True, slots=True)
class ProfileLayout:
    """Directories and ``(path, template)`` pairs making up one profile."""

    directories: Tuple[str, ...]
    files: Tuple[Tuple[str, str], ...]


PROFILE_LAYOUTS: Mapping[TemplateProfile, ProfileLayout] = {
    TemplateProfile.MINIMAL: ProfileLayout(
        directories=("src", "notebooks"),
        files=(
            (".gitignore", GITIGNORE_TEMPLATE),
            ("README.md", README_MINIMAL_TEMPLATE),
            ("{{ env_info_file }}", ENV_INFO_TEMPLATE),
            ("src/__init__.py", ""),
            ("src/logic.py", LOGIC_TEMPLATE),
            ("src/app.py", STREAMLIT_APP_TEMPLATE),
            ("notebooks/01_initial_exploration.ipynb", NOTEBOOK_TEMPLATE),
        ),
    ),
    TemplateProfile.PACKAGED: ProfileLayout(
        directories=("src", "src/{{ package_name }}", "tests", "notebooks"),
        files=(
            (".gitignore", GITIGNORE_TEMPLATE),
            ("README.md", README_PACKAGED_TEMPLATE),
            ("{{ env_info_file }}", ENV_INFO_TEMPLATE),
            ("pyproject.toml", PYPROJECT_TEMPLATE),
            ("src/{{ package_name }}/__init__.py", PACKAGE_INIT_TEMPLATE),
            ("src/{{ package_name }}/main.py", PACKAGE_MAIN_TEMPLATE),
            ("src/{{ package_name }}/logic.py", LOGIC_TEMPLATE),
            ("tests/__init__.py", ""),
            ("tests/test_logic.py", PACKAGE_TEST_TEMPLATE),
            ("notebooks/01_initial_exploration.ipynb", NOTEBOOK_TEMPLATE),
        ),
    ),
}


def layout_for(profile: TemplateProfile) -> ProfileLayout:
    return PROFILE_LAYOUTS[TemplateProfile(profile)]
