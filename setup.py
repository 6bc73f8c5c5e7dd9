from setuptools import find_packages, setup

setup(
    name='mbtr-geometry',
    version='0.1.0',
    description="Geometric building blocks (displacements, distances, inverse distances and angle cosines) "
                "for many-body tensor representations of periodic atomic configurations.",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "einops",
        "tqdm",
    ],
    extras_require={
        "torch": [
            "torch",
        ],
        "test": [
            "pytest",
        ],
    },
)
