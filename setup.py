from os import path

from setuptools import find_packages, setup

dirname = path.abspath(path.dirname(__file__))
with open(path.join(dirname, 'README.md')) as f:
    long_description = f.read()

extras_require = {'arrow': open('arrow-requirements.txt').readlines(),
                  'test': open('test-requirements.txt').readlines()}
extras_require['complete'] = sorted(set(sum(extras_require.values(), [])))

setup(
    name='tablebridge',
    author='tablebridge developers',
    license='BSD 3-clause',
    version='0.1.0',
    description='schema-aware conversion between typed columnar tables and pandas DataFrames',
    classifiers=[
         'Development Status :: 3 - Alpha',
         'Intended Audience :: Developers',
         'Programming Language :: Python :: 3',
         'Programming Language :: Python :: 3.9',
         'Programming Language :: Python :: 3.10',
         'Programming Language :: Python :: 3.11',
         'Programming Language :: Python :: 3.12'
    ],
    packages=find_packages(),
    install_requires=open('requirements.txt').readlines(),
    tests_require=open('test-requirements.txt').readlines(),
    python_requires='>=3.9, <4',
    extras_require=extras_require,
    keywords='data science dataframe typing conversion',
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'tablebridge = tablebridge.__main__:cli'
        ]
    },
    long_description=long_description,
    long_description_content_type='text/markdown'
)
