
from setuptools import setup, find_packages
setup(
    name="solar-monitor",
    version="0.1.0",
    packages=find_packages(include=['solar_monitor*']),
    python_requires=">=3.8",
    install_requires=[
        "streamlit>=1.28.0",
        "numpy>=1.21.0",
        "pandas>=1.3.0",
        "plotly>=5.3.0",
        "matplotlib>=3.4.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=21.5b2",
            "isort>=5.0.0",
            "mypy>=0.812",
            "flake8>=3.9.0"
        ]
    },
    entry_points={
        "console_scripts": [
            "solar-report=solar_monitor.report:main",
        ],
    },
    description="Solar monitoring dashboard with battery state-of-charge simulation",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
