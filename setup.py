# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="assettree",
    version="0.1.0",
    description="Content-addressed asset trees and responsive image variants for static site builds",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["assettree*"]),
    python_requires=">=3.8",
    install_requires=[
        "Pillow",
        "csscompressor",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
