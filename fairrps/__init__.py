"""
可验证公平的奇数招式石头剪刀布
Fair odd-cycle Rock Paper Scissors with HMAC commitment
"""
__version__ = "1.0.0"
