CATEGORIES = [
    {"key": "thoi-trang", "name": "Thời Trang", "icon": "👗"},
    {"key": "dien-tu", "name": "Điện Tử", "icon": "📱"},
    {"key": "my-pham", "name": "Mỹ Phẩm", "icon": "💄"},
    {"key": "nha-cua", "name": "Nhà Cửa & Đời Sống", "icon": "🏠"},
    {"key": "suc-khoe", "name": "Sức Khỏe", "icon": "💊"},
    {"key": "the-thao", "name": "Thể Thao", "icon": "⚽"},
    {"key": "me-be", "name": "Mẹ & Bé", "icon": "👶"},
    {"key": "do-an", "name": "Thực Phẩm", "icon": "🍜"},
    {"key": "sach-vo", "name": "Sách & Văn Phòng", "icon": "📚"},
]
