from setuptools import find_namespace_packages, setup

setup(
    name="flashclock-backend",
    version="1.0.0",
    packages=find_namespace_packages(include=["shared", "services", "services.*"]),
    py_modules=["bootloader"],
    install_requires=[
        "fastapi>=0.110",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.26",
        ],
    },
    include_package_data=True,
    python_requires=">=3.10",
    description="Backend for the Flash Clock subtitle addon (WebVTT wall-clock cues)",
)
