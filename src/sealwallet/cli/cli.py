import argparse
import base64
import getpass
import sys
from typing import List, Optional

from ..config.wallet_config import WalletConfig
from ..exceptions import WalletError
from ..monitoring.logging_config import LogConfig
from ..wallet.store import WalletStore
from ..wallet.wallet import WalletManager

class CLI:
    def __init__(self):
        self.manager: Optional[WalletManager] = None

    def main(self, args: List[str]) -> int:
        parser = self.create_parser()
        args = parser.parse_args(args)
        
        if not hasattr(args, 'func'):
            parser.print_help()
            return 2

        config = WalletConfig(args.config)
        LogConfig(log_dir=config.log_dir, log_level=config.log_level).setup_logging()
        self.manager = WalletManager(WalletStore(args.store or config.store_root))

        try:
            args.func(args)
        except WalletError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='sealwallet CLI')
        parser.add_argument('--config', default='config/wallet.yaml', help='Configuration file')
        parser.add_argument('--store', help='Wallet store directory (overrides configuration)')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        generate = subparsers.add_parser('generate', help='Create a new wallet')
        generate.add_argument('nickname', help='Wallet nickname')
        generate.add_argument('--password', help='Wallet password (prompted if omitted)')
        generate.add_argument('--overwrite', action='store_true', help='Replace an existing wallet')
        generate.set_defaults(func=self.generate_wallet)

        list_wallets = subparsers.add_parser('list', help='List stored wallets')
        list_wallets.set_defaults(func=self.list_wallets)

        show = subparsers.add_parser('show', help='Show a wallet address and public key')
        show.add_argument('nickname', help='Wallet nickname')
        show.set_defaults(func=self.show_wallet)

        delete = subparsers.add_parser('delete', help='Delete a wallet')
        delete.add_argument('nickname', help='Wallet nickname')
        delete.set_defaults(func=self.delete_wallet)

        sign = subparsers.add_parser('sign', help='Sign a message')
        sign.add_argument('nickname', help='Wallet nickname')
        sign.add_argument('message', help='Message to sign')
        sign.add_argument('--password', help='Wallet password (prompted if omitted)')
        sign.set_defaults(func=self.sign_message)

        passwd = subparsers.add_parser('passwd', help='Change a wallet password')
        passwd.add_argument('nickname', help='Wallet nickname')
        passwd.add_argument('--password', help='Current password (prompted if omitted)')
        passwd.add_argument('--new-password', help='New password (prompted if omitted)')
        passwd.set_defaults(func=self.change_password)

        return parser

    @staticmethod
    def _password(given: Optional[str], prompt: str = 'Password: ') -> str:
        return given if given is not None else getpass.getpass(prompt)

    def generate_wallet(self, args):
        wallet = self.manager.generate(
            args.nickname,
            self._password(args.password),
            overwrite=args.overwrite
        )
        print(f"Created wallet '{wallet.nickname}'")
        print(f"Address: {wallet.address}")

    def list_wallets(self, args):
        result = self.manager.list()
        for wallet in result.wallets:
            print(f"{wallet.nickname}\t{wallet.address}")
        for failure in result.failures:
            print(f"Error: {failure.filename}: {failure.error}", file=sys.stderr)

    def show_wallet(self, args):
        info = self.manager.get(args.nickname).info()
        print(f"Nickname: {info.nickname}")
        print(f"Address: {info.address}")
        print(f"Public key: {info.public_key}")

    def delete_wallet(self, args):
        self.manager.delete(args.nickname)
        print(f"Deleted wallet '{args.nickname}'")

    def sign_message(self, args):
        signature = self.manager.sign(
            args.nickname,
            self._password(args.password),
            args.message.encode()
        )
        print(base64.b64encode(signature).decode())

    def change_password(self, args):
        old_password = self._password(args.password, 'Current password: ')
        new_password = self._password(args.new_password, 'New password: ')
        self.manager.change_password(args.nickname, old_password, new_password)
        print(f"Password changed for wallet '{args.nickname}'")

def main():
    cli = CLI()
    sys.exit(cli.main(sys.argv[1:]))

if __name__ == "__main__":
    main()
