from setuptools import setup, find_packages
setup(
    name="municipal_assessments",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=["requests>=2.28"],
    extras_require={"test": ["pytest>=7"]},
    entry_points={
        'console_scripts': [
            'municipal-assessments=municipal_assessments.__main__:_safe_main'
        ]
    }
)
