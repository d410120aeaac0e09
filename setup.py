from setuptools import setup, find_packages

setup(
    name="notification-lib",
    version="0.1.0",
    description="Fluent validation that collects notifications instead of raising",
    author="Jude Payne",
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'notification_lib': ['local-config.yaml', 'messages.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.9',
)
