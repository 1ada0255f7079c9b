from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup  # type: ignore


ROOT = Path(__file__).resolve().parent


def _long_description() -> str:
    readme = ROOT / "README.md"
    if not readme.exists():
        return ""
    return readme.read_text(encoding="utf-8")


setup(
    name="rollcall",
    version="0.1.0",
    description="Single-tenant membership registry with owner-gated profile records",
    long_description=_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "httpx>=0.27",
        "pydantic-settings>=2.7",
    ],
    extras_require={
        "test": [
            "pytest>=7",
        ],
    },
    entry_points={
        "console_scripts": [
            "rollcall=rollcall.__main__:main",
        ],
    },
)
