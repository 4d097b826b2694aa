from setuptools import setup

setup(
    name="cglimits",
    version="0.1.0",
    author="Open Data Cube",
    author_email="",
    maintainer="Open Data Cube",
    maintainer_email="",
    description="Memory and CPU limits of the current process under Linux cgroups",
    long_description="",
    license="Apache License 2.0",
    python_requires=">=3.7",
    tests_require=["pytest", "mock"],
    install_requires=[
        "psutil",
        "click",
    ],
    extras_require={
        "test": ["pytest", "mock"],
    },
    packages=["cglimits"],
    zip_safe=False,
    entry_points={"console_scripts": ["cglimits = cglimits.cli:main"]},
)
