from setuptools import setup, find_packages

setup(
    name="stratification-manager",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    description="Stratification manager: dense keys over every combination of categorical stratifier states",
    python_requires=">=3.10",
)
