
from setuptools import setup, find_packages
setup(
    name="vt_bundle",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["vt-bundle = vt_bundle.cli:main"]},
    python_requires=">=3.9",
)
