from pathlib import Path

from setuptools import find_packages, setup

setup(
    name="annotation_collection",
    version=Path("./annotation_collection/VERSION").read_text().strip(),
    packages=find_packages(exclude=["tests"]),
    package_data={"annotation_collection": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "easydict",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "annotation_collection=annotation_collection.cli:main",
        ],
    },
)
