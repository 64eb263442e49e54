from vdbexport.codec.records import decode_market, decode_trade, encode_market, encode_trade

__all__ = ["decode_market", "decode_trade", "encode_market", "encode_trade"]
