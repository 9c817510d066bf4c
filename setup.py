from setuptools import setup, find_packages

setup(
    name="sessionhub",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "playwright>=1.40.0",
        "selenium>=4.10.0",
        "pytest>=7.0.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sessionhub=sessionhub.cli:main",
        ],
    },
    python_requires=">=3.9",
    description="Thread-scoped browser session registry and lifecycle manager for parallel test runs",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Framework :: Pytest",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
