import click

import tablebridge as tb


@click.group()
def cli():
    pass


@click.command(name='list-native-types')
def list_ntypes():
    print(tb.list_native_types())


@click.command(name='list-categories')
def list_categories():
    print(tb.list_categories())


cli.add_command(list_ntypes)
cli.add_command(list_categories)


if __name__ == "__main__":
    cli()
