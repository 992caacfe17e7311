"""Math Snake - steer the snake, eat the numbers, hit the target."""
