from setuptools import find_packages, setup

setup(
    name="aaarg",
    version="0.2.0",
    description="A library and CLI for mangling audio with aliasing and stutter effects.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "librosa",
        "soundfile",
        "click",
        "rich",
        "pydantic>=2",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "aaarg=aaarg.cli:cli",
        ],
    },
)
