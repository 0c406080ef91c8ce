from setuptools import setup, find_packages

setup(
    name="connect4-minimax",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # Environment wrapper around the game loop
    ],
    extras_require={
        "test": ["pytest<9"],
    },
    entry_points={
        "console_scripts": [
            "connect4-minimax=connect4_minimax.interfaces.cli:main",
        ],
    },
)
