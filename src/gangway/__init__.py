"""LLM構造化出力の検証と破壊的シェルコマンドの判定を行うMCPサーバー。"""
