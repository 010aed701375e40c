from setuptools import find_packages, setup

setup(
    name="inworld-tts",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9",
        "pydantic>=2.0",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "inworld-tts=inworld_tts.cli:main",
        ],
    },
    include_package_data=True,
    description="Client library and CLI for the Inworld text-to-speech API",
)
