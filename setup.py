from setuptools import setup, find_packages

setup(
    name="cronbeat",
    version="0.1.0",
    description="Heartbeat and crash tracking for long-running and scheduled jobs",

    package_dir={"": "src"},
    packages=find_packages(where="src"),

    install_requires=[
        "SQLAlchemy>=2.0.0",
        "psycopg2-binary>=2.9.0",
        "pydantic>=2.0.0",
        "click>=8.1.0",
        "pyyaml>=6.0",
        "structlog>=23.1.0",
        "prometheus-client>=0.16.0",
    ],

    extras_require={
        "dev": [
            "pytest>=7.3.0",
            "pytest-cov>=4.0.0",
            "black>=23.3.0",
            "mypy>=1.3.0",
            "ruff>=0.0.270",
        ],
        "mysql": ["pymysql>=1.0.0"],
    },

    entry_points={
        "console_scripts": [
            "cronbeat=cronbeat.cli.monitor:main",
        ],
    },

    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.11",
    ],
)
