import setuptools

setuptools.setup(
    name = 'polycurve',
    version = '1.0',
    description = 'parametric curve evaluation and adaptive flattening',
    packages = setuptools.find_packages(exclude=['tests']),
    python_requires = '>=3.6',
    install_requires=['numpy'],
    extras_require={'test': ['pytest', 'scipy']},
)
