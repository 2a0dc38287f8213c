"""commitgateのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    from commitgate.cli import cli

    cli()
