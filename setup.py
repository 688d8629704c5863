from setuptools import setup, find_packages

setup(
    name="fin-tilt",
    version="1.0.0",
    author="fin-tilt Team",
    description="Portfolio drift and deposit allocation calculator",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "tilt_calculator": ["py.typed"],
        "tilt_config": ["py.typed"],
    },
    install_requires=[
        "pydantic==2.11.7",
        "PyYAML==6.0.2",
        "rich==13.9.4",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fin-tilt=fin_tilt.main:main",
        ],
    },
    python_requires=">=3.11",
)
