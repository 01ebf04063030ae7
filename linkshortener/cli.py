"""Interactive text menu over LinkShortenerService

Usage:
    $ linkshortener-cli

The menu keeps a "current user" and forwards every action to the service.
Domain errors (invalid input, unknown/expired/exhausted links) are printed and
the loop continues. Choosing 0 shuts the reclamation worker down and exits.
"""

import logging
from collections.abc import Callable

from linkshortener.models import ShortLinkModel
from linkshortener.exceptions import LinkShortenerError
from linkshortener.services import LinkShortenerService
from linkshortener.utils import app_env, initialize_logging, load_config


logger = logging.getLogger(__name__)

MENU = """
MAIN MENU
 1.  Create short link
 2.  Resolve short link
 3.  Delete short link
 4.  My links
 5.  Search my links
 6.  Statistics
 7.  Top links by hits
 8.  Most recent links
 9.  Update access limit
 10. Switch user
 11. All links (admin)
 0.  Exit"""


def describe(link: ShortLinkModel) -> str:
    status = 'ACTIVE' if link.is_active() else 'INACTIVE'
    limit = f'limit: {link.max_hits}' if link.max_hits is not None else 'no limit'
    return (
        f'{link.shortcode} -> {link.target} '
        f'[hits: {link.hits} ({limit}), created: {link.created_at:%Y-%m-%d %H:%M:%S}, '
        f'expires: {link.expires_at:%Y-%m-%d %H:%M:%S}] - {status}'
    )


class ShortenerMenu:
    def __init__(
        self,
        service: LinkShortenerService,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self.service = service
        self.input = input_func
        self.output = output
        self.user_id: str | None = None
        self.actions: dict[int, Callable[[], None]] = {
            1: self.create_link,
            2: self.resolve_link,
            3: self.delete_link,
            4: self.my_links,
            5: self.search,
            6: self.stats,
            7: self.top_links,
            8: self.recent_links,
            9: self.update_limit,
            10: self.select_user,
            11: self.all_links,
        }

    def run(self) -> None:
        self.select_user()
        while True:
            self.output(MENU)
            self.output(f'Current user: {self.service.get_user(self.user_id)}')
            choice = self.ask_int('Choose an action: ')
            if choice == 0:
                self.output('Goodbye!')
                return

            action = self.actions.get(choice)
            if action is None:
                self.output('Unknown choice.')
                continue

            try:
                action()
            except LinkShortenerError as e:
                self.output(f'Error: {e}')

    def ask_int(self, prompt: str) -> int:
        while True:
            try:
                return int(self.input(prompt))
            except ValueError:
                self.output('Please enter a number.')

    def ask_limit(self, prompt: str) -> int | None:
        raw = self.input(prompt).strip()
        return int(raw) if raw else None

    def select_user(self) -> None:
        user_id = self.input('Existing user ID (leave empty to create a new user): ').strip()
        if user_id and self.service.users.exists(user_id):
            self.user_id = user_id
            self.output(f'Welcome back, {self.service.get_user(user_id)}')
            return
        if user_id:
            self.output('User not found, creating a new one.')

        user = self.service.create_user(self.input('User name: ').strip())
        self.user_id = user.user_id
        self.output(f'Created user {user}')

    def create_link(self) -> None:
        target = self.input('Original URL: ')
        try:
            max_hits = self.ask_limit('Access limit (leave empty for none): ')
        except ValueError:
            self.output('Invalid number, creating the link without a limit.')
            max_hits = None

        shortcode = self.service.create_link(target, self.user_id, max_hits=max_hits)
        self.output(f'Short link: {self.service.short_url(shortcode)} (code: {shortcode})')

    def resolve_link(self) -> None:
        shortcode = self.input('Shortcode: ').strip()
        self.output(f'{self.service.short_url(shortcode)} -> {self.service.resolve_link(shortcode)}')

    def delete_link(self) -> None:
        shortcode = self.input('Shortcode to delete: ').strip()
        self.service.delete_link(shortcode, self.user_id)
        self.output(f'Deleted {shortcode}')

    def update_limit(self) -> None:
        shortcode = self.input('Shortcode: ').strip()
        try:
            max_hits = self.ask_limit('New access limit (leave empty to remove it): ')
        except ValueError:
            self.output('Invalid number.')
            return

        self.service.update_limit(shortcode, self.user_id, max_hits)
        self.output(f'Access limit of {shortcode} set to {max_hits if max_hits is not None else "none"}')

    def my_links(self) -> None:
        self.print_links(self.service.list_owned(self.user_id), empty='You have no links.')

    def search(self) -> None:
        query = self.input('Search query: ')
        self.print_links(self.service.search(query, self.user_id), empty='Nothing found.')

    def top_links(self) -> None:
        n = self.ask_int('How many links: ')
        for link in self.service.top_by_hits(n):
            self.output(f'{link.shortcode} -> {link.target} ({link.hits} hits)')

    def recent_links(self) -> None:
        self.print_links(self.service.most_recent(self.ask_int('How many links: ')), empty='No links yet.')

    def all_links(self) -> None:
        self.print_links(self.service.list_all(), empty='No links yet.')

    def stats(self) -> None:
        stats = self.service.stats()
        self.output(f'Links: {stats.total} ({stats.active} active), users: {stats.total_users}')
        self.output(f'Hits: {stats.total_hits} total, {stats.average_hits:.2f} per link')
        if stats.most_popular is not None:
            self.output(f'Most popular: {describe(stats.most_popular)}')

    def print_links(self, links: list[ShortLinkModel], empty: str) -> None:
        if not links:
            self.output(empty)
        for link in links:
            self.output(describe(link))


def main() -> None:
    initialize_logging()
    settings = load_config()
    logger.info('Starting link shortener.', extra={'app_env': app_env()})

    with LinkShortenerService(settings) as service:
        ShortenerMenu(service).run()


if __name__ == '__main__':
    main()
