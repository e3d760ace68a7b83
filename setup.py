"""
Setup file.
"""

from pathlib import Path

from setuptools import find_packages, setup

URL = "https://github.com/leog/ldx"
KEYWORDS = "subprocess output filter rewrite cli"
HERE = Path(__file__).parent


if __name__ == "__main__":
    setup(
        name="ldx",
        version="1.0.0",
        description="Run a command and rewrite its output line by line with substring rules.",
        keywords=KEYWORDS,
        url=URL,
        python_requires=">=3.10",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=["psutil"],
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["ldx = ldx.cli:main"]},
        include_package_data=True,
    )
