"""Setup script for CityGrowth package."""

from setuptools import find_packages, setup

setup(
    name='citygrowth',
    version='0.1.0',
    author='CityGrowth Team',
    author_email='example@example.com',
    description='Procedural road network growth, building placement and routing',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    url='https://github.com/example/citygrowth',
    packages=find_packages(include=['citygrowth', 'citygrowth.*']),
    include_package_data=True,
    package_data={
        'citygrowth.config': ['*.yaml'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.7',
    install_requires=[
        'numpy',
        'pyyaml',
        'noise',
    ],
    extras_require={
        'dev': [
            'pytest',
            'flake8',
            'black',
        ],
    },
)
