from django.core.management.base import BaseCommand, CommandError

from site_counts.block import CACHE_GROUP, Block
from site_counts.services import ABSENT


class Command(BaseCommand):
    help = 'Управление блоком Site Counts: кэш отфильтрованных записей и рендер'

    def add_arguments(self, parser):
        parser.add_argument(
            '--status',
            action='store_true',
            help='Показать, есть ли список в кэше',
        )
        parser.add_argument(
            '--flush',
            action='store_true',
            help='Сбросить кэш отфильтрованных записей',
        )
        parser.add_argument(
            '--render',
            type=int,
            metavar='POST_ID',
            help='Отрендерить блок для записи POST_ID',
        )
        parser.add_argument(
            '--class-name',
            default='',
            help='CSS-класс обёртки для --render',
        )
        parser.add_argument(
            '--post-id',
            type=int,
            default=None,
            help='ID записи для ключа кэша (если ключ зависит от параметров)',
        )

    def handle(self, *args, **options):
        block = Block.default()
        key = block.cache_key(options['post_id'], block.tag, block.category_name)

        if options['flush']:
            block.cache.delete(key, CACHE_GROUP)
            self.stdout.write(self.style.SUCCESS(f'Кэш {CACHE_GROUP}:{key} сброшен'))
        elif options['status']:
            value = block.cache.get(key, CACHE_GROUP)
            if value is ABSENT:
                self.stdout.write(f'Кэш {CACHE_GROUP}:{key} пуст')
            else:
                self.stdout.write(f'Кэш {CACHE_GROUP}:{key}: {len(value)} записей')
        elif options['render'] is not None:
            if options['render'] < 1:
                raise CommandError('POST_ID должен быть положительным')
            attributes = {'className': options['class_name']} if options['class_name'] else {}
            self.stdout.write(block.render(attributes, options['render']))
        else:
            self.stdout.write(
                'Используйте --status, --flush или --render POST_ID'
            )
