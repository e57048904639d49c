"""Setup configuration for the Pronunciation Coach package."""
from setuptools import setup, find_packages

setup(
    name="pron-coach",
    version="1.0.0",
    description="Pronunciation coach API for scoring spoken attempts at practice phrases",
    author="Pronunciation Coach Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "Flask>=3.1.2",
        "numpy>=2.4.2",
        "rapidfuzz>=3.6.0",
        "httpx>=0.27.0",
        "prometheus-client>=0.20.0",
        "prometheus-flask-exporter>=0.23.0",
        "python-dotenv>=1.0.0",
        "gunicorn>=23.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
            "pytest-flask>=1.3.0",
            "black>=23.12.1",
            "flake8>=7.0.0",
            "isort>=5.13.2",
            "mypy>=1.8.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "pron-coach=app.app:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.11",
    ],
)
