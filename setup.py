from setuptools import setup, find_packages

setup(
    name="hough-vision",
    version="1.0.0",
    description="Circle detection for cup and bottle openings using the Hough transform",
    author="hough-vision",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "opencv-python>=4.8.0",
        "numpy>=1.24.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "hough-detect=hough.cli:main",
        ],
    },
    python_requires=">=3.9",
)
