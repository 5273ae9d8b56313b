from pathlib import Path

from setuptools import find_packages, setup

# Load packages from requirements.txt
BASE_DIR = Path(__file__).parent
with open(Path(BASE_DIR, "requirements.txt")) as file:
    required_packages = [ln.strip() for ln in file.readlines() if ln.strip() and not ln.startswith("#")]

# Define our package
setup(
    name="pathforge",
    version="0.1.0",
    description="Adaptive learning-path engine: personalized curricula, progress tracking and explainable recommendations",
    python_requires=">=3.10",
    packages=find_packages(include=["pathforge", "pathforge.*"]),
    package_data={"pathforge": ["schemas/*.json"]},
    install_requires=required_packages,
    extras_require={
        "dev": ["pytest>=7.0", "pytest-cov>=4.0"],
    },
)
