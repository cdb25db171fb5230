from setuptools import setup, find_packages

setup(
    name="axis-audit",
    version="1.0.0",
    packages=find_packages(include=["axis_audit", "axis_audit.*"]),
    install_requires=[
        "playwright>=1.40.0",
        "rich",
        "dataclasses-json>=0.6.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "axis-audit=axis_audit.main:main",
        ],
    },
    python_requires=">=3.9",
    description="Browser-driven bug audits for deployed web applications",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
