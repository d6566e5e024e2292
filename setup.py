import pathlib

import setuptools

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

setuptools.setup(
    name="ethereum-account",
    version="0.1.0",
    description="Ethereum account record, RLP codec and storage bridge",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="CC0-1.0",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "pycryptodome>=3.22,<4",
        "ethereum-types>=0.2.1,<0.3",
        "ethereum-rlp>=0.1.3,<0.2",
    ],
    extras_require={
        "test": [
            "pytest>=8,<9",
            "pytest-cov>=4.1.0,<5",
        ],
        "lint": [
            "isort==5.13.2",
            "mypy==1.14.1",
            "black==23.12.0",
            "flake8==6.1.0",
        ],
    },
)
