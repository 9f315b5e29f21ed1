from setuptools import setup, find_packages

setup(
    name="bosphorus-crossing-detector",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.21.0",
        "pandas>=1.5.0",
        "shapely>=1.7.0",
        "folium>=0.14.0",
        "requests>=2.26.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
