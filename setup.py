"""
Isect3D: Symbolic Triangle-Triangle Intersection

Installation:
    pip install -e .
"""

from setuptools import setup, find_packages

setup(
    name="isect3d",
    version="0.1.0",
    author="Isect3D Contributors",
    description="Exact symbolic triangle-triangle intersection with a batched PyTorch front-end",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["isect3d", "isect3d.*"]),
    python_requires=">=3.8",
    install_requires=[
        "torch>=2.0.0",
        "numpy>=1.20.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "trimesh>=3.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    include_package_data=True,
)
