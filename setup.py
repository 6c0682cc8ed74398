from setuptools import setup, find_namespace_packages

setup(
    name='wavebank',
    version='0.1.0',
    packages=find_namespace_packages('.', include=['wavebank', 'wavebank.*']),
    url='',
    license='',
    author='',
    author_email='',
    description='Band-limited wavetable bank generator',
    python_requires='>=3.7',
    install_requires=['numpy', 'scipy', 'ruamel.yaml>=0.15.0', 'click'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points = {
        'console_scripts': [
            'wavebank-gen=wavebank.generate:main',
            'wavebank-info=wavebank.info:main',
        ],
    }
)
