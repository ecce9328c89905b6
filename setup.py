from setuptools import setup, find_namespace_packages

setup(
    name="creasesim",
    version="0.1.0",
    description="Cricket shot simulator: ball flight, fielding and runs estimation",
    author="CreaseSim",
    packages=find_namespace_packages(include=["creasesim", "creasesim.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.26.0",
        "scipy>=1.12.0",
    ],
    extras_require={
        "test": ["pytest>=8.0.0"],
    },
    entry_points={
        "console_scripts": [
            "creasesim=creasesim.main:main",
        ],
    },
)
