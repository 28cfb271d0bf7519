APP_NAME = "SuscripTrack"
APP_WIDTH = 980
APP_HEIGHT = 680
DB_FILE = "suscriptrack.db"

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

REMINDER_LEAD_DAYS = 2
REMINDER_ID_PREFIX = "subscription_"
REMINDER_TITLE = "Subscription Reminder"
NOTIFICATION_POLL_MS = 60_000

DEFAULT_CATEGORY = "Entertainment"
CATEGORIES = ["Entertainment", "Services", "Utilities", "Health", "Education", "Other"]

CATEGORY_COLORS = {
    "Entertainment": "#2196F3",
    "Services":      "#4CAF50",
    "Utilities":     "#FF9800",
    "Health":        "#F44336",
    "Education":     "#9C27B0",
}
FALLBACK_COLOR = "#888888"

DEFAULT_ICON = "tv.fill"
ICONS = {
    "tv.fill":            "📺",
    "music.note":         "🎵",
    "gamecontroller.fill": "🎮",
    "book.fill":          "📖",
    "heart.fill":         "❤",
    "car.fill":           "🚗",
    "house.fill":         "🏠",
    "wifi":               "📶",
    "phone.fill":         "📞",
    "envelope.fill":      "✉",
    "cloud.fill":         "☁",
    "creditcard.fill":    "💳",
    "app.fill":           "📱",
    "star.fill":          "⭐",
    "globe":              "🌐",
    "camera.fill":        "📷",
}
