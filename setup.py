from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="user-form",
    version="1.0.0",
    author="User Form Team",
    description="Reactive form-state model for a personal data form with social profiles",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.5.0",
        "email-validator>=2.1.0",
        "click>=8.1.7",
        "python-dotenv>=1.0.0",
        "jsonschema>=4.20.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "user-form=user_form.cli:cli",
        ],
    },
)
