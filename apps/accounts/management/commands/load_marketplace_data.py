"""
Management command to import the raw marketplace dataset.

Usage:
    python manage.py load_marketplace_data --restaurants restaurant_with_menu.json
    python manage.py load_marketplace_data --users users_with_purchase_history.json
    python manage.py load_marketplace_data --clear --restaurants r.json --users u.json

Restaurant file: JSON array of
    {"restaurantName", "cashBalance", "openingHours", "menu": [{"dishName", "price"}]}

User file: JSON array of
    {"id", "name", "cashBalance", "purchaseHistory": [
        {"dishName", "restaurantName", "transactionAmount", "transactionDate"}]}

Restaurants are owned by a service account. Imported users get an
unusable password and have to be given one before they can log in.
"""

import json
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.contrib.auth.hashers import UNUSABLE_PASSWORD_PREFIX
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.accounts.models import User
from apps.restaurants.models import Restaurant, Menu
from apps.restaurants.services import InvalidOpeningHoursError, parse_opening_hours
from apps.purchases.models import PurchaseHistory

logger = logging.getLogger(__name__)

TRANSACTION_DATE_FORMATS = ['%m/%d/%Y %I:%M %p', '%Y-%m-%d %H:%M:%S']


class Command(BaseCommand):
    help = 'Import restaurants with menus and users with purchase history from JSON files'

    def add_arguments(self, parser):
        parser.add_argument(
            '--restaurants',
            help='Path to the restaurants JSON file',
        )
        parser.add_argument(
            '--users',
            help='Path to the users JSON file',
        )
        parser.add_argument(
            '--owner',
            default=settings.MARKETPLACE_SERVICE_ACCOUNT,
            help='Name of the account that owns imported restaurants',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete previously imported marketplace data first',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if not (options['restaurants'] or options['users'] or options['clear']):
            raise CommandError('Nothing to do: pass --restaurants, --users and/or --clear')

        if options['clear']:
            self.stdout.write('Clearing marketplace data...')
            self.clear_data(options['owner'])

        if options['restaurants']:
            owner = self.get_service_account(options['owner'])
            self.load_restaurants(self.read_json(options['restaurants']), owner)

        if options['users']:
            self.load_users(self.read_json(options['users']))

        self.stdout.write(self.style.SUCCESS('Marketplace data loaded successfully!'))

    def read_json(self, path):
        """Read a JSON array from ``path``."""
        try:
            with open(path, encoding='utf-8') as fh:
                data = json.load(fh)
        except OSError as e:
            raise CommandError(f'Cannot read {path}: {e}')
        except json.JSONDecodeError as e:
            raise CommandError(f'Invalid JSON in {path}: {e}')

        if not isinstance(data, list):
            raise CommandError(f'{path} must contain a JSON array')
        return data

    def clear_data(self, owner_name):
        """Remove purchases, restaurants and imported accounts."""
        PurchaseHistory.objects.all().delete()
        Restaurant.objects.all().delete()
        # Imported accounts never had a usable password
        User.objects.filter(password__startswith=UNUSABLE_PASSWORD_PREFIX).delete()
        User.objects.filter(name=owner_name).delete()
        logger.info("Cleared marketplace data")

    def get_service_account(self, name):
        """Get or create the account owning imported restaurants."""
        owner, created = User.objects.get_or_create(name=name)
        if created:
            owner.set_unusable_password()
            owner.save(update_fields=['password'])
            self.stdout.write(f'  Created service account "{name}"')
        return owner

    def load_restaurants(self, rows, owner):
        """Create or update restaurants and their menus."""
        self.stdout.write('  Loading restaurants...')

        dish_count = 0
        bad_hours = 0
        for row in rows:
            opening_hours = row.get('openingHours') or ''
            try:
                parse_opening_hours(opening_hours)
            except InvalidOpeningHoursError as e:
                bad_hours += 1
                logger.warning("Restaurant %r: %s", row.get('restaurantName'), e)

            restaurant, _ = Restaurant.objects.update_or_create(
                name=row['restaurantName'],
                defaults={
                    'cash_balance': to_decimal(row.get('cashBalance', 0)),
                    'opening_hours': opening_hours,
                    'owner': owner,
                },
            )

            for dish in row.get('menu', []):
                Menu.objects.update_or_create(
                    restaurant=restaurant,
                    dish_name=dish['dishName'],
                    defaults={'price': to_decimal(dish['price'])},
                )
                dish_count += 1

        logger.info("Imported %d restaurants with %d dishes", len(rows), dish_count)
        self.stdout.write(f'  {len(rows)} restaurants, {dish_count} dishes')
        if bad_hours:
            self.stdout.write(self.style.WARNING(
                f'  {bad_hours} restaurants have opening hours that cannot be parsed'
            ))

    def load_users(self, rows):
        """Create or update users and replace their purchase history with the file's."""
        self.stdout.write('  Loading users...')

        menus = {
            (menu.restaurant.name, menu.dish_name): menu
            for menu in Menu.objects.select_related('restaurant')
        }

        records = []
        for row in rows:
            user, created = User.objects.update_or_create(
                name=row['name'],
                defaults={'cash_balance': to_decimal(row.get('cashBalance', 0))},
            )
            if created:
                user.set_unusable_password()
                user.save(update_fields=['password'])

            PurchaseHistory.objects.filter(user=user).delete()
            for entry in row.get('purchaseHistory', []):
                records.append(PurchaseHistory(
                    user=user,
                    menu=menus.get((entry['restaurantName'], entry['dishName'])),
                    dish_name=entry['dishName'],
                    restaurant_name=entry['restaurantName'],
                    transaction_amount=to_decimal(entry['transactionAmount']),
                    transaction_date=parse_transaction_date(entry['transactionDate']),
                ))

        PurchaseHistory.objects.bulk_create(records, batch_size=1000)

        logger.info("Imported %d users with %d purchases", len(rows), len(records))
        self.stdout.write(f'  {len(rows)} users, {len(records)} purchases')


def to_decimal(value):
    """Convert a JSON number to a 2-place Decimal."""
    try:
        return Decimal(str(value)).quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError):
        raise CommandError(f'Invalid amount: {value!r}')


def parse_transaction_date(value):
    """Parse ``02/10/2020 04:09 AM`` or ISO timestamps into an aware datetime."""
    try:
        moment = parse_datetime(value)
    except ValueError:
        moment = None

    if moment is None:
        for fmt in TRANSACTION_DATE_FORMATS:
            try:
                moment = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
        else:
            raise CommandError(f'Invalid transaction date: {value!r}')

    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    return moment
