# setup.py
from setuptools import setup, find_packages

setup(
    name="ren",
    version="0.1.0",
    description="Lifetime-safe OpenGL 4.5 resources and an application run loop",
    packages=find_packages(include=["ren", "ren.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "glfw>=2.5.0",
        "PyOpenGL>=3.1.5",
        "Pillow>=9.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
