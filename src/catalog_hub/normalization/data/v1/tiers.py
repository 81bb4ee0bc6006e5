TIERS = [
    {"key": "n1", "name": "CAO CẤP", "bucket": "high_end", "description": "Sản phẩm cao cấp, chất lượng premium"},
    {"key": "n2", "name": "BÌNH DÂN", "bucket": "budget", "description": "Giá cả phải chăng, chất lượng tốt"},
    {"key": "n3", "name": "ĐA DẠNG", "bucket": "mixed", "description": "Đa dạng mẫu mã, nhiều lựa chọn"},
]
