from setuptools import setup, find_packages

setup(
    name="player-development-sim",
    version="0.1.0",
    description="Season-by-season player rating development engine and calibration tools",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "devsim=devsim.main:main",
        ],
    },
)
