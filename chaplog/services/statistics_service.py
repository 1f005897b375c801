"""
Per-user reading statistics.

Everything here is computed on request from the stored entries, books and
reviews; nothing is cached or maintained incrementally.
"""
import calendar
from collections import OrderedDict
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List

from chaplog.repositories import BookRepository, BookReviewRepository, ReadingEntryRepository
from chaplog.utils.clock import utctoday

MONTH_NAMES = list(calendar.month_name)  # index 0 is ''

BOOK_UPDATE_TOLERANCE = timedelta(seconds=1)


def calculate_reading_streak(reading_dates: Iterable[date], today: date) -> int:
    """
    Count consecutive days with reading, ending today or yesterday.

    ``reading_dates`` must be distinct and sorted newest first.
    """
    streak = 0
    current = None
    for reading_date in reading_dates:
        if reading_date > today:
            continue
        if current is None:
            # The run may start today or yesterday; after that every day must be present.
            if reading_date < today - timedelta(days=1):
                break
        elif reading_date != current:
            break
        streak += 1
        current = reading_date - timedelta(days=1)
    return streak


def month_bounds(year, month):
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class StatisticsService:
    def __init__(self, book_repository=None, entry_repository=None, review_repository=None,
                 today_provider=utctoday):
        self.books = book_repository or BookRepository()
        self.entries = entry_repository or ReadingEntryRepository()
        self.reviews = review_repository or BookReviewRepository()
        self.today_provider = today_provider

    def get_summary(self, user_id) -> Dict[str, Any]:
        today = self.today_provider()
        month_start, month_end = month_bounds(today.year, today.month)
        year_start, year_end = date(today.year, 1, 1), date(today.year, 12, 31)

        reading_dates = self.entries.distinct_reading_dates(user_id)

        return {
            'totalBooks': self.books.count_for_user(user_id),
            'completedBooks': self.books.count_by_status(user_id, 'completed'),
            'readingBooks': self.books.count_by_status(user_id, 'reading'),
            'unreadBooks': self.books.count_by_status(user_id, 'unread'),
            'totalPagesRead': self.entries.total_pages_read(user_id),
            'averageRating': self.entries.average_rating(user_id),
            'readingStreak': calculate_reading_streak(reading_dates, today),
            'booksThisMonth': self.reviews.count_completed_between(user_id, month_start, month_end),
            'pagesThisMonth': self.entries.pages_read_between(user_id, month_start, month_end),
            'booksThisYear': self.reviews.count_completed_between(user_id, year_start, year_end),
            'pagesThisYear': self.entries.pages_read_between(user_id, year_start, year_end),
        }

    def get_monthly_statistics(self, user_id, year) -> Dict[str, Any]:
        monthly_data = []
        for month in range(1, 13):
            start, end = month_bounds(year, month)
            monthly_data.append({
                'month': MONTH_NAMES[month],
                'booksCompleted': self.reviews.count_completed_between(user_id, start, end),
                'pagesRead': self.entries.pages_read_between(user_id, start, end),
                'entriesCount': self.entries.count_between(user_id, start, end),
            })

        total_entries = sum(m['entriesCount'] for m in monthly_data)
        total_completed = sum(m['booksCompleted'] for m in monthly_data)

        # First month wins ties, so an empty year reports January.
        most_active_month = 1
        for index, data in enumerate(monthly_data, start=1):
            if data['entriesCount'] > monthly_data[most_active_month - 1]['entriesCount']:
                most_active_month = index

        return {
            'year': year,
            'monthlyData': monthly_data,
            'totalEntries': total_entries,
            'totalBooksCompleted': total_completed,
            'averageEntriesPerMonth': round(total_entries / 12, 1),
            'mostActiveMonth': most_active_month,
        }

    def get_genre_statistics(self, user_id) -> Dict[str, Any]:
        total_books = self.books.count_for_user(user_id)
        genre_data = []
        for genre in self.books.get_genres(user_id):
            count = self.books.count_by_genre(user_id, genre)
            percentage = round(count / total_books * 100, 1) if total_books else 0
            genre_data.append({'genre': genre, 'count': count, 'percentage': percentage})

        genre_data.sort(key=lambda g: g['count'], reverse=True)

        most_read = genre_data[0]['genre'] if genre_data else None
        # NOTE: ranked by share of all books, same as most_read; no per-genre completion ratio yet.
        highest_completion = max(genre_data, key=lambda g: g['percentage'])['genre'] if genre_data else None

        return {
            'genreData': genre_data,
            'totalGenres': len(genre_data),
            'mostReadGenre': most_read,
            'highestCompletionRateGenre': highest_completion,
        }

    def get_recent_activities(self, user_id, limit=20) -> List[Dict[str, Any]]:
        activities = []

        for book in self.books.recently_updated(user_id, limit * 2):
            activities.append({
                'date': book.created_at,
                'type': 'book_added',
                'description': "Added a book",
                'bookTitle': book.title,
                'bookId': book.id,
                'pagesRead': None,
                'chapter': None,
                'rating': None,
            })
            if book.updated_at > book.created_at + BOOK_UPDATE_TOLERANCE:
                activities.append({
                    'date': book.updated_at,
                    'type': 'book_updated',
                    'description': "Updated book details",
                    'bookTitle': book.title,
                    'bookId': book.id,
                    'pagesRead': None,
                    'chapter': None,
                    'rating': None,
                })

        for entry in self.entries.latest_created(user_id, limit):
            activities.append({
                'date': entry.created_at,
                'type': 'entry_added',
                'description': f"Read up to page {entry.end_page}",
                'bookTitle': entry.book.title if entry.book else None,
                'bookId': entry.book_id,
                'pagesRead': entry.pages_read,
                'chapter': entry.chapter,
                'rating': entry.rating,
            })

        for review in self.reviews.latest_created(user_id, limit):
            activities.append({
                'date': review.created_at,
                'type': 'review_added',
                'description': "Posted a review",
                'bookTitle': review.book.title if review.book else None,
                'bookId': review.book_id,
                'pagesRead': None,
                'chapter': None,
                'rating': review.overall_rating,
            })

        activities.sort(key=lambda a: a['date'], reverse=True)
        activities = activities[:limit]
        for activity in activities:
            activity['date'] = activity['date'].isoformat()
        return activities

    def get_daily_heatmap(self, user_id, year, month) -> Dict[str, Any]:
        first_day, last_day = month_bounds(year, month)
        days_in_month = last_day.day

        by_date = OrderedDict()
        for entry in self.entries.get_in_date_range(user_id, first_day, last_day):
            by_date.setdefault(entry.reading_date, []).append(entry)

        daily_data = []
        for offset in range(days_in_month):
            day = first_day + timedelta(days=offset)
            day_entries = by_date.get(day, [])
            titles = []
            for entry in day_entries:
                title = entry.book.title if entry.book else None
                if title and title not in titles:
                    titles.append(title)
            pages_read = sum(entry.pages_read for entry in day_entries)
            daily_data.append({
                'date': day.isoformat(),
                'pagesRead': pages_read,
                'entriesCount': len(day_entries),
                'bookTitles': titles,
                'hasReading': pages_read > 0,
            })

        total_pages = sum(d['pagesRead'] for d in daily_data)
        days_with_reading = sum(1 for d in daily_data if d['hasReading'])
        # Averaged over every day of the month, not just the days with reading.
        average = round(total_pages / days_in_month, 1) if days_with_reading else 0

        return {
            'year': year,
            'month': month,
            'monthName': MONTH_NAMES[month],
            'dailyData': daily_data,
            'totalPagesMonth': total_pages,
            'totalEntriesMonth': sum(d['entriesCount'] for d in daily_data),
            'averagePagesPerDay': average,
            'maxPagesDay': max(d['pagesRead'] for d in daily_data),
            'daysWithReading': days_with_reading,
        }

    def current_year(self):
        return self.today_provider().year
