# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="prettylogger",
    version="1.0.0",
    description="Bordered log formatting with an asynchronous, size-rotating disk sink",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["prettylogger*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'prettylogger=prettylogger.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
