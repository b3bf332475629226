# setup.py
from setuptools import setup, find_packages

setup(
    name="pidctl",
    version="0.1.0",
    description="Discrete-time PID and PIDT1 tracking controllers with anti-windup and bumpless transfer",
    packages=find_packages(include=["pidctl", "pidctl.*"]),
    install_requires=[
        'numpy>=1.21.0',
        'scipy>=1.7.0',
        'matplotlib>=3.4.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.0'
        ]
    },
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
