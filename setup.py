from setuptools import setup, find_packages

setup(
    name="hometownweather",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "httpx",
        "pandas",
        "azure-core",
        "azure-storage-blob",
        "azure-identity",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.9",
    description="OpenWeather client, observable weather state and forecast view for a saved hometown.",
    author="chriscoveyduck",
    author_email="",
    include_package_data=True,
)
