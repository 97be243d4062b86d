"""Setup script for counter-queue-sim."""

from setuptools import setup, find_packages

setup(
    name="counter-queue-sim",
    version="0.1.0",
    description="Discrete-event simulation of a multi-window service counter with priority queues",
    author="Counter Queue Sim",
    license="MIT",
    packages=find_packages(include=["counter_sim", "counter_sim.*", "scripts"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "simpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "run-simulation=scripts.run_simulation:main",
        ],
    },
)
